"""View layer: step table, pure projections and the rendering surface."""

from pysams.view.projector import (
    Indicator,
    Panel,
    PanelCommand,
    StepPanelCommand,
    ViewCommand,
    project,
    project_panel,
)
from pysams.view.steps import StepDescriptor, StepId, descriptor_for
from pysams.view.surface import NullSurface, RenderCommand, RenderSurface

__all__ = [
    "Indicator",
    "NullSurface",
    "Panel",
    "PanelCommand",
    "RenderCommand",
    "RenderSurface",
    "StepDescriptor",
    "StepId",
    "StepPanelCommand",
    "ViewCommand",
    "descriptor_for",
    "project",
    "project_panel",
]
