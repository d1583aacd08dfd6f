"""Configuration management using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GENERATED_DIR = "cratemap_generated"


class RenderOptions(BaseModel):
	# Link primitive scalar types (u32, bool, ...) like any other type
	primitives: bool = False


class Settings(BaseSettings):
	"""Run settings, read from CRATEMAP_* environment variables and overridden by CLI flags."""

	model_config = SettingsConfigDict(
		env_prefix="CRATEMAP_",
		env_file=".env",
		env_file_encoding="utf-8",
		extra="ignore",
	)

	input_path: Path
	output_path: Path
	watch: bool = False
	recursive: bool = True
	primitives: bool = False
	silent: bool = False

	@field_validator("input_path")
	@classmethod
	def validate_input_path(cls, v: Path) -> Path:
		"""Ensure the input exists."""
		if not v.exists():
			raise ValueError(f"Input path does not exist: {v}")
		return v.resolve()

	@property
	def notes_dir(self) -> Path:
		"""Notes live in their own folder so clearing it never touches the rest of the vault."""
		return self.output_path / GENERATED_DIR

	@property
	def render_options(self) -> RenderOptions:
		return RenderOptions(primitives=self.primitives)


def get_settings(**overrides: Any) -> Settings:
	"""Load settings from the environment; non-None overrides win."""
	return Settings(**{key: value for key, value in overrides.items() if value is not None})
