import logging
from typing import Any, Dict, List, Mapping, Sequence, Union
from searxng_node.context import ExecutionContext
from searxng_node.description import CREDENTIALS_NAME, NODE_DESCRIPTION
from searxng_node.models import (
    AdditionalFields,
    ErrorResult,
    FormattedResult,
    SearchMetadata,
    SearchResponse,
    SearxngCredentials,
    SingleAnswer,
)

logger = logging.getLogger(__name__)

# Upstream agent steps hand free-form text over under any of these names
QUERY_FIELDS = ("query", "input", "prompt")

class NodeOperationError(Exception):
    """Raised when the node cannot run at all"""
    pass

def resolve_query(item: Any, default: Any) -> Any:
    """Pick the query from the first string-valued candidate field, else the default"""
    if isinstance(item, Mapping):
        for field in QUERY_FIELDS:
            value = item.get(field)
            if isinstance(value, str):
                return value
    return default

def build_query_parameters(
    query: Any,
    categories: Union[Sequence[str], str],
    additional_fields: AdditionalFields
) -> Dict[str, Any]:
    """
    Map node configuration onto SearXNG query-string parameters

    Optional parameters are left out when unset so the instance applies
    its own defaults.
    """
    if isinstance(categories, str):
        joined = categories
    else:
        joined = ",".join(categories)

    params: Dict[str, Any] = {
        "q": query,
        "categories": joined,
        "format": additional_fields.format or "json",
    }

    for name in ("language", "time_range", "safesearch", "pageno"):
        value = getattr(additional_fields, name)
        if value is not None and value != "":
            params[name] = value

    return params

def build_headers(credentials: SearxngCredentials) -> Dict[str, str]:
    return {
        "Accept": "application/json",
        "Authorization": f"Bearer {credentials.api_key}",
    }

def format_response(query: Any, response: Any, single_response: bool) -> Dict[str, Any]:
    """
    Reshape a raw SearXNG payload into an output record

    Args:
        query: The resolved query
        response: Decoded response body, passed through untouched as ``raw``
        single_response: Collapse to the first hit's text when possible

    Returns:
        Either the single-answer record or the full result record
    """
    payload = response if isinstance(response, Mapping) else {}
    hits = payload.get("results")
    if not isinstance(hits, list):
        hits = []

    results: List[FormattedResult] = []
    for hit in hits:
        if not isinstance(hit, Mapping):
            hit = {}
        results.append(FormattedResult(
            title=hit.get("title"),
            url=hit.get("url"),
            content=hit.get("content"),
            snippet=hit.get("snippet") or hit.get("content")
        ))

    if single_response and results:
        # content first here, while snippet prefers its own field above
        first = results[0]
        return SingleAnswer(query=query, answer=first.content or first.snippet).model_dump()

    return SearchResponse(
        query=query,
        results=results,
        metadata=SearchMetadata(
            total=payload.get("number_of_results"),
            time=payload.get("search_time"),
            engine=payload.get("engine")
        ),
        raw=response
    ).model_dump()

class SearxngNode:
    """Workflow node that runs a SearXNG search for every input item"""

    description = NODE_DESCRIPTION

    async def execute(self, context: ExecutionContext) -> List[Dict[str, Any]]:
        """
        Run one execution pass

        Returns:
            One output record per input item, in input order

        Raises:
            NodeOperationError: When no credentials are available and the
                host does not continue on failure
            Exception: Any per-item failure when the host does not continue
                on failure
        """
        items = context.get_input_data()
        return_data: List[Dict[str, Any]] = []

        try:
            credentials = await self._get_credentials(context)
        except Exception as e:
            if not context.continue_on_fail():
                logger.error(f"Searxng node aborted: {str(e)}")
                raise
            logger.warning(f"Credential lookup failed, marking {len(items)} items as failed: {str(e)}")
            for i, item in enumerate(items):
                query = resolve_query(item, context.get_parameter("query", i))
                return_data.append(ErrorResult(error=str(e), query=query).model_dump())
            return return_data

        for i, item in enumerate(items):
            query: Any = ""
            try:
                query = resolve_query(item, context.get_parameter("query", i))
                return_data.append(await self._search_item(context, credentials, query, i))
            except Exception as e:
                if context.continue_on_fail():
                    logger.warning(f"Search failed for item {i} (query='{query}'): {str(e)}")
                    return_data.append(ErrorResult(error=str(e), query=query).model_dump())
                    continue
                logger.error(f"Search failed for item {i} (query='{query}'): {str(e)}")
                raise

        return return_data

    async def _get_credentials(self, context: ExecutionContext) -> SearxngCredentials:
        credentials = await context.get_credentials(CREDENTIALS_NAME)
        if not credentials:
            raise NodeOperationError("No credentials got returned!")
        if isinstance(credentials, SearxngCredentials):
            return credentials
        return SearxngCredentials.model_validate(credentials)

    async def _search_item(
        self,
        context: ExecutionContext,
        credentials: SearxngCredentials,
        query: Any,
        index: int
    ) -> Dict[str, Any]:
        categories = context.get_parameter("categories", index)
        single_response = bool(context.get_parameter("single_response", index))
        additional_fields = AdditionalFields.model_validate(
            context.get_parameter("additional_fields", index) or {}
        )

        params = build_query_parameters(query, categories, additional_fields)
        logger.info(f"Searxng search: query='{query}', categories='{params['categories']}'")

        response = await context.http_get(
            credentials.search_url,
            params,
            build_headers(credentials)
        )
        return format_response(query, response, single_response)
