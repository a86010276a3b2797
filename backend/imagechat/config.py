from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # LLM (OpenAI-compatible API - works with OpenRouter, Ollama, LM Studio, etc.)
    llm_api_base: str = "https://api.openai.com/v1"
    llm_api_key: str = ""
    llm_model: str = "gpt-4o-mini"
    llm_max_tokens: int = 300

    # Uploads
    max_image_size: int = 5 * 1024 * 1024  # 5MB
    allowed_image_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
    ]

    # App
    app_title: str = "Image Chat AI"
    cors_origin_regex: str = r"http://localhost:\d+"
    log_level: str = "INFO"
    default_theme: str = "dark"

    # Observability
    langsmith_api_key: str = ""
    langsmith_endpoint: str = "https://eu.api.smith.langchain.com"
    langsmith_project: str = "image-chat"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()


class Language(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    background: str
    background_animation: str | None = None
    primary: str
    secondary: str
    accent: str
    text: str
    panel_background: str
    chat_background: str
    border: str


class UIConfig(BaseModel):
    """Read-only configuration handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    title: str
    max_file_size: int
    allowed_image_types: tuple[str, ...]
    languages: tuple[Language, ...]
    themes: dict[str, Theme]
    default_theme: str


LANGUAGES = (
    Language(code="en", name="English"),
    Language(code="es", name="Spanish"),
    Language(code="fr", name="French"),
    Language(code="de", name="German"),
    Language(code="zh", name="Chinese"),
)

# Black and orange palette
THEMES = {
    "light": Theme(
        background="linear-gradient(135deg, #1a1a1a 0%, #ff6b00 100%)",
        primary="#ff6b00",
        secondary="#ff8c00",
        accent="#ff4500",
        text="#ffffff",
        panel_background="rgba(0,0,0,0.8)",
        chat_background="rgba(30,30,30,0.9)",
        border="rgba(255,255,255,0.2)",
    ),
    "dark": Theme(
        background="linear-gradient(45deg, #000000, #ff6b00, #ff4500)",
        background_animation="linear-gradient(-45deg, #000000, #ff6b00, #ff8c00, #ff4500)",
        primary="#ff6b00",
        secondary="#ff8c00",
        accent="#ff4500",
        text="#ffffff",
        panel_background="rgba(0,0,0,0.9)",
        chat_background="rgba(20,20,20,0.9)",
        border="rgba(255,255,255,0.2)",
    ),
}


@lru_cache
def get_ui_config() -> UIConfig:
    settings = get_settings()
    default_theme = settings.default_theme if settings.default_theme in THEMES else "dark"
    return UIConfig(
        title=settings.app_title,
        max_file_size=settings.max_image_size,
        allowed_image_types=tuple(settings.allowed_image_types),
        languages=LANGUAGES,
        themes=THEMES,
        default_theme=default_theme,
    )
