from pydantic import BaseModel, ConfigDict, Field, field_validator

from imagechat.services.image_service import validate_data_uri


class ProcessImageRequest(BaseModel):
    image: str  # data URI
    language: str = Field(default="en", max_length=16)

    @field_validator("image")
    @classmethod
    def check_image(cls, v: str) -> str:
        return validate_data_uri(v)

    @field_validator("language", mode="before")
    @classmethod
    def default_language(cls, v):
        return v or "en"


class ProcessedImageResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    description: str
    translated_text: str | None = Field(default=None, alias="translatedText")
