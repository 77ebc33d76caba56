"""Interpolation service."""

from __future__ import annotations

from neuroshell.core.datamodels import Command
from neuroshell.services.base import Service, requires_initialized


class InterpolationService(Service):
    name = "interpolation"

    @requires_initialized
    def interpolate_string(self, text: str) -> str:
        return self.context.interpolator.interpolate_string(text)

    @requires_initialized
    def interpolate_command(self, cmd: Command) -> Command:
        return self.context.interpolator.interpolate_command(cmd)

    @requires_initialized
    def has_variables(self, text: str) -> bool:
        return self.context.interpolator.has_variables(text)
