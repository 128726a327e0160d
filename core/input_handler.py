"""Input handling for keyboard and mouse events."""

import pygame
from pygame.locals import *
from config import galaxy as config

from .camera import Camera
from .parameter_editor import ParameterEditor, random_seed


class InputHandler:
    """
    Routes pygame input to the camera and the parameter editor.

    Sets `params_changed` when an edit produced a new parameter set and
    `fullscreen_requested` on double click or F.
    """

    def __init__(self, camera: Camera, editor: ParameterEditor):
        self.camera = camera
        self.editor = editor
        self.mouse_dragging = False
        self.mouse_panning = False
        self.last_mouse_pos = (0, 0)
        self.last_click_ms = -10_000

        self.params_changed = False
        self.fullscreen_requested = False
        self.show_help = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            return self._handle_key(event)
        elif event.type == MOUSEBUTTONDOWN:
            if event.button == 1:
                now = pygame.time.get_ticks()
                if now - self.last_click_ms <= config.CAMERA["double_click_ms"]:
                    self.fullscreen_requested = True
                self.last_click_ms = now
                self.mouse_dragging = True
                self.camera.stop()
                self.last_mouse_pos = pygame.mouse.get_pos()
            elif event.button == 3:
                self.mouse_panning = True
                self.last_mouse_pos = pygame.mouse.get_pos()
        elif event.type == MOUSEBUTTONUP:
            if event.button == 1:
                self.mouse_dragging = False
            elif event.button == 3:
                self.mouse_panning = False
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.25)

        return True

    def _handle_key(self, event) -> bool:
        shift = bool(event.mod & KMOD_SHIFT)

        if event.key == K_ESCAPE:
            return False
        elif event.key == K_f:
            self.fullscreen_requested = True
        elif event.key == K_h:
            self.show_help = not self.show_help
        elif event.key == K_TAB:
            if shift:
                self.editor.select_previous()
            else:
                self.editor.select_next()
        elif event.key == K_RIGHT:
            self.editor.adjust(+1, coarse=shift)
            self.params_changed = True
        elif event.key == K_LEFT:
            self.editor.adjust(-1, coarse=shift)
            self.params_changed = True
        elif event.key == K_l:
            self.editor.toggle_lines()
            self.params_changed = True
        elif event.key == K_r:
            self.editor.reseed(random_seed())
            self.params_changed = True

        return True

    def handle_continuous_input(self, dt: float):
        """Handle continuous keyboard input (called each frame)."""
        keys = pygame.key.get_pressed()
        rot_speed = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom_speed = config.CAMERA["keyboard_zoom_speed"] * dt

        if keys[K_a]:
            self.camera.rotate(-rot_speed, 0)
        if keys[K_d]:
            self.camera.rotate(rot_speed, 0)
        if keys[K_w]:
            self.camera.rotate(0, rot_speed)
        if keys[K_s]:
            self.camera.rotate(0, -rot_speed)

        if keys[K_q]:
            self.camera.zoom(-zoom_speed)
        if keys[K_e]:
            self.camera.zoom(zoom_speed)

        if self.mouse_dragging or self.mouse_panning:
            current_pos = pygame.mouse.get_pos()
            dx = current_pos[0] - self.last_mouse_pos[0]
            dy = current_pos[1] - self.last_mouse_pos[1]
            if self.mouse_dragging:
                self.camera.nudge(
                    dx * config.CAMERA["mouse_sensitivity"],
                    -dy * config.CAMERA["mouse_sensitivity"],
                    dt
                )
            else:
                self.camera.pan(dx, dy)
            self.last_mouse_pos = current_pos
