import logging
from typing import Any, Dict, List, Optional
from mcp.server.fastmcp import FastMCP, Context
from searxng_node.config import configure_logging
from searxng_node.context import LocalExecutionContext
from searxng_node.node import SearxngNode

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

class MCPServer:
    """MCP Server that exposes the Searxng node as an agent tool"""

    def __init__(self):
        self.node = SearxngNode()
        self.server = FastMCP("searxng-search-server")
        self._setup_tools()

    async def search(
        self,
        query: str,
        categories: Optional[List[str]] = None,
        single_response: bool = False,
        language: Optional[str] = None,
        time_range: Optional[str] = None,
        safesearch: Optional[str] = None,
        pageno: Optional[int] = None
    ) -> Dict[str, Any]:
        """Run the node on a single item and return its output record"""
        additional_fields = {
            "language": language,
            "time_range": time_range,
            "safesearch": safesearch,
            "pageno": pageno,
        }
        parameters = {
            "query": query,
            "categories": categories if categories is not None else ["general"],
            "single_response": single_response,
            "additional_fields": {k: v for k, v in additional_fields.items() if v is not None},
        }
        context = LocalExecutionContext(
            items=[{"query": query}],
            parameters=parameters,
            continue_on_fail=True
        )
        output = await self.node.execute(context)
        return output[0]

    def _setup_tools(self):
        """Register MCP tools with the server"""

        @self.server.tool(
            name="searxng_search",
            description="Search the web using a SearXNG metasearch instance"
        )
        async def searxng_search(
            query: str,
            categories: Optional[List[str]] = None,
            single_response: bool = False,
            language: Optional[str] = None,
            time_range: Optional[str] = None,
            safesearch: Optional[str] = None,
            pageno: Optional[int] = None,
            ctx: Context = None
        ) -> Dict[str, Any]:
            """
            Search the web using SearXNG

            Args:
                query: Search query string (required)
                categories: Categories to search in (optional, default: ["general"])
                single_response: Return only the first result's content as `answer`
                language: en, de, fr, es, it or all
                time_range: all, day, week, month or year
                safesearch: "0" (off), "1" (moderate) or "2" (strict)
                pageno: Page number of results, starting at 1

            Returns:
                The node's output record: results with metadata, a single answer,
                or an error record with success set to false
            """
            request_msg = f"Searxng search request received: query='{query}', categories={categories}"
            if ctx:
                await ctx.info(request_msg)
            else:
                logger.info(request_msg)

            result = await self.search(
                query,
                categories=categories,
                single_response=single_response,
                language=language,
                time_range=time_range,
                safesearch=safesearch,
                pageno=pageno
            )

            if result.get("success"):
                done_msg = f"Searxng search completed for query='{query}'"
            else:
                done_msg = f"Searxng search failed for query='{query}': {result.get('error')}"
            if ctx:
                await ctx.info(done_msg)
            else:
                logger.info(done_msg)

            return result

    def run(self):
        """Run the MCP server using stdio communication"""
        logger.info("Starting MCP Searxng search server...")

        try:
            self.server.run(transport="stdio")
        except Exception as e:
            logger.error(f"Failed to start MCP server: {str(e)}", exc_info=True)
            raise

def main():
    """Main entry point for the MCP server"""
    server = MCPServer()

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("MCP server stopped by user")
    except Exception as e:
        logger.error(f"MCP server failed: {str(e)}", exc_info=True)
        exit(1)

if __name__ == "__main__":
    main()
