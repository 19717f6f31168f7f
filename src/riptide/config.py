from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env", "riptide.env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Hand-written sources (controllers, models, routes, initializers)
    source_ext: str = Field(default="rb", alias="RIPTIDE_SOURCE_EXT")
    controller_suffix: str = Field(default="_controller", alias="RIPTIDE_CONTROLLER_SUFFIX")

    # Generated statements
    task_base_class: str = Field(default="Volt::Task", alias="RIPTIDE_TASK_BASE_CLASS")
    client_page_reference: str = Field(default="page", alias="RIPTIDE_CLIENT_PAGE")
    server_page_reference: str = Field(default="$page", alias="RIPTIDE_SERVER_PAGE")

    # Template parser as "package.module:attr" (plain parser when unset)
    template_parser: str | None = Field(default=None, alias="RIPTIDE_TEMPLATE_PARSER")

    @property
    def normalized_source_ext(self) -> str:
        return self.source_ext.strip().lstrip(".").lower()
