from .output import capture_output, echo, get_output_stream
from .renderer import Template, TemplateRenderer, create_environment, get_environment

__all__ = [
    "Template",
    "TemplateRenderer",
    "capture_output",
    "create_environment",
    "echo",
    "get_environment",
    "get_output_stream",
]
