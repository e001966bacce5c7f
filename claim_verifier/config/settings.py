"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        gemini_api_key: Google Gemini API key (required for LLM-backed components)
        gemini_model: Gemini model used for classification, verdicts and critique
        gemini_embedding_model: Gemini embedding model for knowledge base queries
        max_rpm: Maximum Gemini requests per minute
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        pinecone_api_key: Pinecone API key (knowledge base disabled when empty)
        pinecone_index_host: Pinecone index host URL
        pinecone_namespace: Namespace holding verified claims
        tavily_api_key: Tavily API key (falls back to Wikipedia when empty)
        http_timeout_seconds: Timeout applied to evidence source HTTP calls
        enforce_strategy_timeout: Fail the request when retrieval exceeds the strategy budget
    """

    gemini_api_key: str = Field(default="", description="Google Gemini API key")
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Default Gemini model identifier"
    )
    gemini_embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Gemini embedding model identifier"
    )
    max_rpm: int = Field(
        default=15,
        description="Maximum requests per minute (free tier limit)"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    pinecone_api_key: str = Field(
        default="",
        description="Pinecone API key for the verified-claims knowledge base"
    )
    pinecone_index_host: str = Field(
        default="",
        description="Pinecone index host, e.g. https://claims-abc123.svc.pinecone.io"
    )
    pinecone_namespace: str = Field(
        default="knowledge-base",
        description="Pinecone namespace for verified claims"
    )
    tavily_api_key: str = Field(
        default="",
        description="Tavily search API key"
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for evidence source HTTP requests"
    )
    enforce_strategy_timeout: bool = Field(
        default=False,
        description="Abort retrieval when it exceeds the strategy's timeout_ms"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance - import this throughout the application
settings = Settings()
