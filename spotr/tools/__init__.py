"""Spotr tools - one module per entity kind."""

from shared.toolkit import RegistryBuilder
from spotr.backend import Backend
from spotr.config import Settings

from .analyses import register_analysis_tools
from .blueprints import register_blueprint_tools
from .movements import register_movement_tools
from .programs import register_program_tools


def register_all_tools(builder: RegistryBuilder, backend: Backend, settings: Settings) -> None:
    register_movement_tools(builder, backend, settings)
    register_program_tools(builder, backend, settings)
    register_blueprint_tools(builder, backend, settings)
    register_analysis_tools(builder, backend, settings)


__all__ = [
    "register_all_tools",
    "register_analysis_tools",
    "register_blueprint_tools",
    "register_movement_tools",
    "register_program_tools",
]
