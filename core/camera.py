"""Orbit camera for inspecting the galaxy."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import galaxy as config


class Camera:
    """Orbits a movable target with damped rotation, smooth zoom and panning."""

    def __init__(self):
        self.radius = config.CAMERA["initial_radius"]
        self.target_radius = self.radius
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]
        self.target = np.array([0.0, 0.0, 0.0])
        self.zoom_smoothing = 8.0
        self.damping = config.CAMERA["damping"]

        # Angular velocity in degrees per second, decays by `damping`
        self.theta_velocity = 0.0
        self.phi_velocity = 0.0

    def get_direction(self) -> np.ndarray:
        """Unit vector from target to camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        x = math.cos(phi_rad) * math.cos(theta_rad)
        y = math.sin(phi_rad)
        z = math.cos(phi_rad) * math.sin(theta_rad)
        return np.array([x, y, z])

    def get_camera_axes(self) -> tuple:
        """(forward, right, up); forward points from camera toward target."""
        forward = -self.get_direction()
        world_up = np.array([0.0, 1.0, 0.0])

        right = np.cross(forward, world_up)
        right_len = np.linalg.norm(right)
        if right_len < 0.001:
            right = np.array([1.0, 0.0, 0.0])
        else:
            right = right / right_len

        up = np.cross(right, forward)
        up = up / np.linalg.norm(up)

        return forward, right, up

    def get_position(self) -> np.ndarray:
        return self.target + self.radius * self.get_direction()

    def _clamp_phi(self, phi: float) -> float:
        return max(config.CAMERA["min_phi"], min(config.CAMERA["max_phi"], phi))

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate immediately by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = self._clamp_phi(self.phi + d_phi)

    def nudge(self, d_theta: float, d_phi: float, dt: float):
        """Rotate and keep the motion as velocity that damps out."""
        self.rotate(d_theta, d_phi)
        if dt > 0:
            self.theta_velocity = d_theta / dt
            self.phi_velocity = d_phi / dt

    def pan(self, dx: float, dy: float):
        """Move the target in the view plane; dx/dy in screen pixels."""
        _, right, up = self.get_camera_axes()
        scale = config.CAMERA["pan_sensitivity"] * max(self.radius, 0.1)
        self.target = self.target - right * dx * scale + up * dy * scale

    def zoom(self, delta: float):
        """Immediately zoom by the given amount."""
        self.radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.radius + delta)
        )
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        """Smoothly zoom by the given amount."""
        self.target_radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.target_radius + delta)
        )

    def stop(self):
        self.theta_velocity = 0.0
        self.phi_velocity = 0.0

    def update(self, dt: float):
        """Advance zoom smoothing and rotation damping by dt seconds."""
        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)

        if self.theta_velocity or self.phi_velocity:
            self.rotate(self.theta_velocity * dt, self.phi_velocity * dt)
            decay = math.exp(-self.damping * dt)
            self.theta_velocity *= decay
            self.phi_velocity *= decay
            if abs(self.theta_velocity) < 0.01 and abs(self.phi_velocity) < 0.01:
                self.stop()

    def apply(self):
        """Load the view transform into the modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            self.target[0], self.target[1], self.target[2],
            0, 1, 0
        )
