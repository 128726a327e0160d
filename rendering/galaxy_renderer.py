"""Point sprite and line rendering of generated galaxy buffers."""

import numpy as np
from OpenGL.GL import *
from OpenGL.arrays import vbo

from galaxy import GalaxyBuffers


class GalaxyRenderer:
    """
    Owns the GPU copies of one generation's buffers.

    upload() replaces the current VBOs; release() deletes them. Both must be
    called with a current GL context.
    """

    # Point size in pixels per unit of the `size` parameter
    POINT_SCALE = 200.0

    def __init__(self):
        self._vbo_positions = None
        self._vbo_colors = None
        self._vbo_line_positions = None
        self._vbo_line_colors = None
        self.point_count = 0
        self.segment_count = 0
        self.point_size = 2.0
        self.line_opacity = 0.3

    def upload(self, buffers: GalaxyBuffers):
        """Replace GPU buffers with a new generation."""
        self.release()

        params = buffers.params
        self.point_size = max(1.0, params.size * self.POINT_SCALE)
        self.line_opacity = params.line_opacity
        self.point_count = buffers.point_count
        self.segment_count = buffers.segment_count

        try:
            self._vbo_positions = vbo.VBO(buffers.positions.reshape(-1, 3), usage=GL_STATIC_DRAW)
            self._vbo_colors = vbo.VBO(buffers.colors.reshape(-1, 3), usage=GL_STATIC_DRAW)
            if self.segment_count:
                self._vbo_line_positions = vbo.VBO(
                    buffers.line_positions.reshape(-1, 3), usage=GL_STATIC_DRAW
                )
                # RGBA so the opacity travels with the vertex colour
                line_rgba = np.empty((self.segment_count * 2, 4), dtype=np.float32)
                line_rgba[:, :3] = buffers.line_colors.reshape(-1, 3)
                line_rgba[:, 3] = self.line_opacity
                self._vbo_line_colors = vbo.VBO(line_rgba, usage=GL_STATIC_DRAW)
        except Exception as e:
            print(f"[Renderer] VBO upload failed: {e}")
            self.release()
            raise

        print(f"[Renderer] Uploaded {self.point_count:,} points, {self.segment_count:,} segments")

    def release(self):
        """Delete GPU buffers of the current generation."""
        for name in ("_vbo_positions", "_vbo_colors", "_vbo_line_positions", "_vbo_line_colors"):
            buf = getattr(self, name)
            if buf is not None:
                buf.delete()
                setattr(self, name, None)
        self.point_count = 0
        self.segment_count = 0

    def _draw_arrays(self, positions, colors, color_size: int, mode, count: int):
        positions.bind()
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(3, GL_FLOAT, 0, None)

        colors.bind()
        glEnableClientState(GL_COLOR_ARRAY)
        glColorPointer(color_size, GL_FLOAT, 0, None)

        glDrawArrays(mode, 0, count)

        positions.unbind()
        colors.unbind()
        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_COLOR_ARRAY)

    def draw(self):
        """Draw points with additive blending, then lines."""
        if self._vbo_positions is None:
            return

        glDepthMask(GL_FALSE)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE)  # Additive blending for glow effect

        glEnable(GL_POINT_SMOOTH)
        glPointSize(self.point_size)
        self._draw_arrays(self._vbo_positions, self._vbo_colors, 3, GL_POINTS, self.point_count)
        glDisable(GL_POINT_SMOOTH)

        if self._vbo_line_positions is not None:
            self._draw_arrays(
                self._vbo_line_positions, self._vbo_line_colors, 4,
                GL_LINES, self.segment_count * 2
            )

        glDisable(GL_BLEND)
        glDepthMask(GL_TRUE)
