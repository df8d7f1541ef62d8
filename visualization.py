# visualization.py
"""
Handles the visualization of the flow field using Pygame.

The renderer knows nothing about the simulation rules. It reports the
current viewport, turns DrawRequests into filled points, and services the
window events needed to stop the process or follow a resize.

Frames are not cleared by default: each point is drawn over the previous
frame, so particles trace out the flow lines. A non-zero trail alpha fades
the old frame instead, giving trails of limited length.
"""
import logging
import pygame
from typing import Dict, Any, Iterable, Optional, Tuple

from coloring import DrawRequest, wrap_hue
from constants import (
    BACKGROUND_COLOR, FULLSCREEN, FPS, DEFAULT_WINDOW_WIDTH,
    DEFAULT_WINDOW_HEIGHT, WINDOW_CAPTION, DEFAULT_TRAIL_ALPHA
)

# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[Dict[str, Any]] = None):
#     - Inputs:
#       - vis_params: "visualization" section of config.json.
#         - "fullscreen": bool
#         - "window_width": int
#         - "window_height": int
#         - "trail_alpha": int in [0, 255]
#     - Side Effects: Initializes Pygame, creates a display surface and
#       fills it with the background colour once.
#
#   - viewport(self) -> Tuple[float, float]:
#     - Outputs: Half the current window size. Read fresh on every call.
#
#   - draw(self, requests: Iterable[DrawRequest]) -> bool:
#     - Outputs:
#       - bool: False if the user has quit, True otherwise.
#     - Side Effects: Fades the previous frame (if trail_alpha > 0), renders
#       one point per request and flips the display. Never waits.
#
#   - wait_for_next_frame(self) -> None:
#     - Side Effects: Sleeps to hold the frame rate at FPS.


def to_pixel(screen_x: float, screen_y: float, window_width: int, window_height: int) -> Tuple[float, float]:
    """Centred coordinates (origin mid-window, y up) to Pygame pixels."""
    return window_width / 2 + screen_x, window_height / 2 - screen_y


def hsl_color(hue: float, saturation: float, lightness: float) -> pygame.Color:
    """Builds a Pygame colour from HSL components in [0, 1]."""
    color = pygame.Color(0, 0, 0)
    color.hsla = (wrap_hue(hue) * 360, saturation * 100, lightness * 100, 100)
    return color


class Visualizer:
    """
    Renders the flow points as small filled ellipses.
    """
    def __init__(self, vis_params: Optional[Dict[str, Any]] = None):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params if vis_params is not None else {}

        self.trail_alpha = int(vis_params.get('trail_alpha', DEFAULT_TRAIL_ALPHA))
        if not 0 <= self.trail_alpha <= 255:
            msg = f"Configuration error: trail_alpha must be in [0, 255], got {self.trail_alpha}."
            logging.critical(msg)
            raise ValueError(msg)

        pygame.init()

        if vis_params.get('fullscreen', FULLSCREEN):
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width = vis_params.get('window_width', DEFAULT_WINDOW_WIDTH)
            height = vis_params.get('window_height', DEFAULT_WINDOW_HEIGHT)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_CAPTION)
        self.clock = pygame.time.Clock()

        self.screen.fill(BACKGROUND_COLOR)
        self.fade_surface = self._build_fade_surface()

        logging.info(
            f"Visualizer initialized with Pygame display ({width}x{height}), "
            f"trail alpha {self.trail_alpha}."
        )

    def _build_fade_surface(self) -> Optional[pygame.Surface]:
        """
        Builds the translucent surface blitted over the previous frame.
        None when trails are permanent.
        """
        if self.trail_alpha == 0:
            return None
        surface = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        surface.fill((BACKGROUND_COLOR[0], BACKGROUND_COLOR[1], BACKGROUND_COLOR[2], self.trail_alpha))
        return surface

    def viewport(self) -> Tuple[float, float]:
        """The simulation's viewport: the half-extent of the window."""
        width, height = self.screen.get_size()
        return width / 2, height / 2

    def handle_events(self) -> bool:
        """
        Drains the event queue.

        Returns:
            bool: False if the application should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE:
                # Existing particle positions are not rescaled.
                logging.info(f"Window resized to {event.w}x{event.h}.")
                self.fade_surface = self._build_fade_surface()
        return True

    def draw(self, requests: Iterable[DrawRequest]) -> bool:
        """
        Draws all points and handles events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self.handle_events():
            return False

        window_width, window_height = self.screen.get_size()
        if self.fade_surface is not None:
            self.screen.blit(self.fade_surface, (0, 0))

        for request in requests:
            px, py = to_pixel(request.screen_x, request.screen_y, window_width, window_height)
            w = max(1, round(request.width))
            h = max(1, round(request.height))
            rect = pygame.Rect(round(px - w / 2), round(py - h / 2), w, h)
            pygame.draw.ellipse(
                self.screen,
                hsl_color(request.hue, request.saturation, request.lightness),
                rect
            )

        pygame.display.flip()
        return True

    def wait_for_next_frame(self):
        """Holds the loop at the configured frame rate."""
        self.clock.tick(FPS)

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
