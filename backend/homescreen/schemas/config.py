"""Home-screen configuration response schemas.

Attributes are snake_case; the wire format is camelCase via aliases.
Request bodies are not parsed through these models: payloads go through
``homescreen.services.validation`` so every problem is reported at once.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

AspectRatio = Literal["portrait", "landscape", "square"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CarouselSlide(CamelModel):
    id: str
    image_url: str
    alt_text: str
    link_url: str | None = None
    aspect_ratio: AspectRatio


class CarouselConfig(CamelModel):
    slides: list[CarouselSlide]


class TextConfig(CamelModel):
    heading: str
    heading_color: str
    description: str
    description_color: str


class CtaConfig(CamelModel):
    primary_text: str
    primary_url: str
    primary_color: str
    primary_text_color: str


class ConfigPayload(CamelModel):
    carousel: CarouselConfig
    text: TextConfig
    cta: CtaConfig


class ConfigMetadataResponse(CamelModel):
    id: str
    schema_version: int
    created_at: str
    updated_at: str


class StoredConfigResponse(ConfigMetadataResponse):
    data: ConfigPayload


class ImportResponse(CamelModel):
    data: ConfigPayload
