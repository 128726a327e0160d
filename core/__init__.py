"""
Core application components.

Only the GL-free editor is exported here; import core.application,
core.camera and core.input_handler directly (they need pygame and OpenGL).
"""

from .parameter_editor import ParameterEditor

__all__ = ["ParameterEditor"]
