import logging
from pydantic_settings import BaseSettings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

class Settings(BaseSettings):
    searxng_api_url: str = "http://localhost:8080"
    searxng_api_key: str = ""
    request_timeout: int = 30
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()

def configure_logging():
    """Logging setup shared by the MCP server and the HTTP host"""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
