"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from sashiko.pdf.config import RenderConfig


class Settings(BaseSettings):
    sashiko_env: str = "development"
    sashiko_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:4321"]

    # PDF rendering
    print_safe_colors: bool = True
    flatten_curves: bool = True
    curve_samples: int = 16

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def render_config(self) -> RenderConfig:
        return RenderConfig(
            print_safe_colors=self.print_safe_colors,
            flatten_curves=self.flatten_curves,
            curve_samples=self.curve_samples,
        )


settings = Settings()
