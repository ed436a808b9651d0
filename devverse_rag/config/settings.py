from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    google_ai_api_key: Optional[str] = None
    pinecone_api_key: Optional[str] = None

    pinecone_index: str = "devverse-articles"
    pinecone_host: Optional[str] = None
    pinecone_control_url: str = "https://api.pinecone.io"

    site_url: str = Field(
        default="https://devverse-swe.vercel.app",
        validation_alias=AliasChoices("SITE_URL", "NEXT_PUBLIC_SITE_URL"),
    )
    content_dir: str = "./content"

    embedding_model: str = "text-embedding-004"

    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1"
    gemini_openai_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"

    llm_temperature: float = 0.2
    llm_max_tokens: int = 1024

    # Model pool
    chat_model_family: str = "gemini"
    excluded_cost_tiers: list[str] = ["pro"]
    model_list_ttl_seconds: float = 600.0

    rag_top_k: int = 6
    chunk_max_length: int = 1200

    # Vectorization
    vectorize_batch_size: int = 40
    vectorize_embed_delay_ms: int = 250
    vectorize_max_retries: int = 6
    vectorize_retry_base_ms: int = 1000
    vectorize_retry_jitter_ms: int = 250

    chat_timeout_seconds: Optional[float] = None
    http_timeout_seconds: float = 30.0

    log_level: str = "INFO"

    class Config:
        env_file = (".env", ".env.local")
        extra = "ignore"


settings = Settings()
