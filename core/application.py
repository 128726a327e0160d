"""Main application class that ties everything together."""

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import galaxy as config
from galaxy import GalaxyError, GalaxyParameters, GalaxyPipeline
from .camera import Camera
from .input_handler import InputHandler
from .parameter_editor import ParameterEditor
from rendering import GalaxyRenderer, TextRenderer


class GalaxyApplication:
    """Viewer loop: regenerates the galaxy whenever the parameters change."""

    def __init__(self, params: GalaxyParameters = None):
        pygame.init()
        self.screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        pygame.display.set_mode(self.screen_size, DOUBLEBUF | OPENGL)
        pygame.display.set_caption(config.WINDOW["title"])

        # Core components
        self.camera = Camera()
        self.editor = ParameterEditor(params or GalaxyParameters.from_config(config.GALAXY))
        self.input_handler = InputHandler(self.camera, self.editor)

        # Rendering components
        self.renderer = GalaxyRenderer()
        self.text_renderer = TextRenderer(color=config.COLORS["text"])

        # Generation
        self.pipeline = GalaxyPipeline()
        print("[App] Compiling connection kernels...")
        self.pipeline.warmup()
        self.buffers = None
        self.last_error = None

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0

        self._setup_gl()
        self._regenerate()
        print("[App] Ready!")

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LEQUAL)
        self._setup_projection()

    def _setup_projection(self):
        width, height = pygame.display.get_surface().get_size()
        self.screen_size = (width, height)
        glViewport(0, 0, width, height)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            width / max(height, 1),
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _regenerate(self):
        """Run the pipeline for the editor's parameters and swap buffers in."""
        params = self.editor.params
        try:
            buffers = self.pipeline.regenerate(params, previous=self.buffers)
        except GalaxyError as e:
            self.last_error = str(e)
            print(f"[App] Generation failed: {e}")
            if self.buffers is not None:
                self.editor.params = self.buffers.params
            return

        self.last_error = None
        self.buffers = buffers
        self.renderer.upload(buffers)

    def _toggle_fullscreen(self):
        pygame.display.toggle_fullscreen()
        self._setup_projection()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

        if self.input_handler.fullscreen_requested:
            self.input_handler.fullscreen_requested = False
            self._toggle_fullscreen()

        if self.input_handler.params_changed:
            self.input_handler.params_changed = False
            if self.buffers is None or self.editor.params != self.buffers.params:
                self._regenerate()

    def _update(self, dt: float):
        dt = min(dt, 0.05)
        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()
        self.renderer.draw()

        # HUD
        segments = self.renderer.segment_count
        status = f"Points: {self.renderer.point_count:,}"
        if self.editor.params.show_lines:
            status += f"  |  Lines: {segments:,}"
        status += f"  |  FPS: {self.fps:.0f}"
        y = self.text_renderer.draw_lines([status], 10, 10, self.screen_size)

        if self.last_error:
            y = self.text_renderer.draw_lines(
                [f"Error: {self.last_error}"], 10, y, self.screen_size, config.COLORS["error_text"]
            )

        if self.input_handler.show_help:
            y = self.text_renderer.draw_lines(self.editor.describe(), 10, y + 6, self.screen_size)
            self.text_renderer.draw_lines(
                ["TAB: Field | </>: Adjust (SHIFT x10) | L: Lines | R: Reseed | F: Fullscreen | H: Help"],
                10, y + 6, self.screen_size
            )

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            dt = self.clock.tick() / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        self.renderer.release()
        if self.buffers is not None:
            self.buffers.release()
        pygame.quit()
        print("[App] Shutdown complete")
