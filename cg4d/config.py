"""
Налаштування геометричного ядра cg4d.

Exports:
    - Settings: pydantic-модель допусків і політик (frozen).
    - DEFAULT_SETTINGS: екземпляр за замовчуванням.
    - load_settings: читання Settings з YAML.
    - resolve: `None` -> DEFAULT_SETTINGS.
"""
from __future__ import annotations
from math import copysign
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

__all__ = ["Settings", "DEFAULT_SETTINGS", "load_settings", "resolve"]

_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    """Допуски та політики помилок для реконструкції комірок і зрізів."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    coincidence_eps: float = Field(1e-5, description="Допуск Hyperplane.inside при збиранні комірок")
    merge_eps: float = Field(1e-9, description="Відстань, на якій точки перетину зливаються в одну")
    displacement_min: float = Field(-4.0, description="Нижня межа зсуву гіперплощини зрізу")
    displacement_max: float = Field(4.0, description="Верхня межа зсуву гіперплощини зрізу")
    displacement_nudge: float = Field(1e-3, description="Мінімальний |зсув|: нуль відсуваємо на це значення")
    strict_cells: bool = Field(False, description="HRepresentationError замість попередження")
    strict_slices: bool = Field(True, description="SliceCountError замість пропуску тетраедра")
    log_level: str = Field("INFO", description="Рівень логування loguru")

    @field_validator("coincidence_eps", "merge_eps", "displacement_nudge")
    @classmethod
    def _positive(cls, v: float) -> float:
        if not v > 0.0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in _LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return v

    @model_validator(mode="after")
    def _ordered_range(self) -> "Settings":
        if self.displacement_min >= self.displacement_max:
            raise ValueError("displacement_min must be smaller than displacement_max")
        return self

    def clamp_displacement(self, value: float) -> float:
        """
        Обмежує зсув діапазоном [displacement_min, displacement_max]; |d| менший
        за displacement_nudge замінюється на ±displacement_nudge.
        """
        d = min(max(float(value), self.displacement_min), self.displacement_max)
        if abs(d) < self.displacement_nudge:
            d = copysign(self.displacement_nudge, d)
        return d


DEFAULT_SETTINGS = Settings()


def resolve(settings: Optional[Settings]) -> Settings:
    return DEFAULT_SETTINGS if settings is None else settings


def load_settings(path: Union[str, Path]) -> Settings:
    """
    Читає YAML-файл з плоским словником полів Settings.
    Порожній файл дає налаштування за замовчуванням.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(data).__name__}")
    return Settings(**data)
