import copy
from typing import Any, Dict, List

CREDENTIALS_NAME = "searxng_api"

CATEGORY_OPTIONS: List[Dict[str, str]] = [
    {"name": "General", "value": "general"},
    {"name": "Images", "value": "images"},
    {"name": "News", "value": "news"},
    {"name": "Videos", "value": "videos"},
    {"name": "Files", "value": "files"},
    {"name": "IT", "value": "it"},
    {"name": "Maps", "value": "map"},
    {"name": "Music", "value": "music"},
    {"name": "Science", "value": "science"},
    {"name": "Social Media", "value": "social media"},
]

LANGUAGE_OPTIONS: List[Dict[str, str]] = [
    {"name": "English", "value": "en"},
    {"name": "German", "value": "de"},
    {"name": "French", "value": "fr"},
    {"name": "Spanish", "value": "es"},
    {"name": "Italian", "value": "it"},
    {"name": "All Languages", "value": "all"},
]

TIME_RANGE_OPTIONS: List[Dict[str, str]] = [
    {"name": "Any Time", "value": "all"},
    {"name": "Day", "value": "day"},
    {"name": "Week", "value": "week"},
    {"name": "Month", "value": "month"},
    {"name": "Year", "value": "year"},
]

SAFESEARCH_OPTIONS: List[Dict[str, str]] = [
    {"name": "Off", "value": "0"},
    {"name": "Moderate", "value": "1"},
    {"name": "Strict", "value": "2"},
]

FORMAT_OPTIONS: List[Dict[str, str]] = [
    {"name": "HTML", "value": "html"},
    {"name": "JSON", "value": "json"},
    {"name": "RSS", "value": "rss"},
]

# Field metadata rendered by the host; nothing here is evaluated by the node
# except the defaults and the option value lists.
NODE_DESCRIPTION: Dict[str, Any] = {
    "display_name": "Searxng",
    "name": "searxng",
    "icon": "file:searxng.svg",
    "group": ["transform"],
    "version": 1,
    "subtitle": '={{$parameter["operation"]}}',
    "description": "Perform web searches using Searxng",
    "defaults": {"name": "Searxng"},
    "inputs": ["main"],
    "outputs": ["main"],
    "usable_as_tool": True,
    "credentials": [{"name": CREDENTIALS_NAME, "required": True}],
    "codex": {
        "categories": ["Search", "Web"],
        "alias": ["web-search", "searxng", "search-engine"],
        "subcategories": {"search": ["Web Search", "Metasearch"]},
    },
    "properties": [
        {
            "display_name": "Operation",
            "name": "operation",
            "type": "options",
            "no_data_expression": True,
            "options": [
                {
                    "name": "Search",
                    "value": "search",
                    "description": "Perform a search query",
                    "action": "Perform a search query",
                },
            ],
            "default": "search",
        },
        {
            "display_name": "Query",
            "name": "query",
            "type": "string",
            "default": "",
            "required": True,
            "placeholder": "Enter search query",
            "description": "The search query to perform",
            "hint": "Can be provided directly or via AI agent input",
        },
        {
            "display_name": "Categories",
            "name": "categories",
            "type": "multi_options",
            "options": CATEGORY_OPTIONS,
            "default": ["general"],
            "description": "Categories to search in",
        },
        {
            "display_name": "Return Single Response",
            "name": "single_response",
            "type": "boolean",
            "default": False,
            "description": "Whether to return only the content from the first search result as a string",
        },
        {
            "display_name": "Additional Fields",
            "name": "additional_fields",
            "type": "collection",
            "placeholder": "Add Field",
            "default": {},
            "options": [
                {
                    "display_name": "Language",
                    "name": "language",
                    "type": "options",
                    "options": LANGUAGE_OPTIONS,
                    "default": "en",
                    "description": "Language of the search results",
                },
                {
                    "display_name": "Time Range",
                    "name": "time_range",
                    "type": "options",
                    "options": TIME_RANGE_OPTIONS,
                    "default": "all",
                    "description": "Time range for the search results",
                },
                {
                    "display_name": "Safe Search",
                    "name": "safesearch",
                    "type": "options",
                    "options": SAFESEARCH_OPTIONS,
                    "default": "1",
                    "description": "Safe search level",
                },
                {
                    "display_name": "Page Number",
                    "name": "pageno",
                    "type": "number",
                    "type_options": {"min_value": 1},
                    "default": 1,
                    "description": "Page number of results",
                },
                {
                    "display_name": "Format",
                    "name": "format",
                    "type": "options",
                    "options": FORMAT_OPTIONS,
                    "default": "json",
                    "description": "Output format of the search results",
                },
            ],
        },
    ],
}


def option_values(options: List[Dict[str, str]]) -> List[str]:
    return [option["value"] for option in options]


def parameter_default(name: str) -> Any:
    """Return the declared default of a top-level node property"""
    for prop in NODE_DESCRIPTION["properties"]:
        if prop["name"] == name:
            return copy.deepcopy(prop["default"])
    raise KeyError(f"Unknown node parameter: {name}")
