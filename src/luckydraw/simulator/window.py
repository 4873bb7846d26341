"""
Desktop front end for the lucky draw wheel using pygame.

Mouse drags on the wheel feed the gesture tracker; one simulation
tick runs per frame.
"""

import asyncio
import logging
import os

import numpy as np
import pygame

from luckydraw.app import LuckyDrawApp
from luckydraw.config.settings import DisplaySettings
from luckydraw.core.events import Event, EventType, tick_event
from luckydraw.errors import PrizeValidationError
from luckydraw.graphics.primitives import clear, create_buffer
from luckydraw.graphics.wheel import label_positions, render_wheel
from luckydraw.prizes.palette import hex_to_rgb
from luckydraw.wheel.gesture import WheelGeometry

logger = logging.getLogger(__name__)


class SimulatorWindow:
    """
    Main window: wheel on the left, history panel on the right.

    Keyboard Mapping:
        ESC / Q: Exit
        C: Clear history
        R: Reset prizes to defaults
        N: Add a prize
        BACKSPACE: Remove the last prize
        X: Cancel the current spin
        H: Toggle history panel
        D: Toggle debug overlay
    """

    def __init__(self, app: LuckyDrawApp, config: DisplaySettings | None = None) -> None:
        self.app = app
        self.config = config or app.settings.display

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_history = True
        self._show_debug = app.settings.debug

        # Fonts
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        self._wheel_size = self.config.wheel_radius * 2 + 40
        self._wheel_buffer = create_buffer(self._wheel_size, self._wheel_size, self.config.bg_color)

        # Banner shown after a settle
        self._banner: str | None = None
        self._banner_color: tuple[int, int, int] = self.config.text_color

        app.event_bus.subscribe(EventType.SPIN_SETTLED, self._on_settled)
        app.event_bus.subscribe(EventType.DRAG_START, self._on_drag_start)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.DOUBLEBUF
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()

        # Prize names are CJK by default
        cjk_font_paths = [
            "/System/Library/Fonts/PingFang.ttc",
            "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
            "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
        ]

        for font_path in cjk_font_paths:
            if os.path.exists(font_path):
                try:
                    self._font = pygame.font.Font(font_path, 20)
                    self._small_font = pygame.font.Font(font_path, 14)
                    logger.info(f"Using font: {font_path}")
                    break
                except (OSError, pygame.error) as e:
                    logger.debug(f"Font {font_path} failed: {e}")

        if not self._font:
            for font_name in ["Noto Sans CJK SC", "Microsoft YaHei", "PingFang SC"]:
                if pygame.font.match_font(font_name):
                    self._font = pygame.font.SysFont(font_name, 20)
                    self._small_font = pygame.font.SysFont(font_name, 14)
                    logger.info(f"Using system font: {font_name}")
                    break

        if not self._font:
            self._font = pygame.font.SysFont(None, 22)
            self._small_font = pygame.font.SysFont(None, 16)
            logger.warning("No CJK font found, using default")

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    # -- Events --------------------------------------------------------

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.app.press(*event.pos)

            elif event.type == pygame.MOUSEMOTION:
                self.app.drag(*event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.app.release()

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key
        store = self.app.prize_store

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_c:
            self.app.clear_history()
        elif key == pygame.K_h:
            self._show_history = not self._show_history
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_x:
            self.app.cancel_spin()
        else:
            try:
                if key == pygame.K_r:
                    store.reset()
                elif key == pygame.K_n:
                    store.add()
                elif key == pygame.K_BACKSPACE:
                    store.remove(len(store) - 1)
            except PrizeValidationError as e:
                logger.warning(f"Prize edit rejected: {e}")
                self._banner = str(e)
                self._banner_color = (239, 68, 68)

    def _on_settled(self, event: Event) -> None:
        self._banner = f"🎉 {event.data['prize']}"
        self._banner_color = hex_to_rgb(event.data["color"])

    def _on_drag_start(self, event: Event) -> None:
        self._banner = None

    # -- Rendering -----------------------------------------------------

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)
        self._render_wheel()
        self._render_banner()
        if self._show_history:
            self._render_history_panel()
        if self._show_debug:
            self._render_debug_overlay()

        pygame.display.flip()

    def _render_wheel(self) -> None:
        wheel = self.app.wheel
        offset_x = wheel.geometry.center_x - self._wheel_size / 2
        offset_y = wheel.geometry.center_y - self._wheel_size / 2

        # Geometry in buffer coordinates
        local = WheelGeometry(
            center_x=self._wheel_size / 2,
            center_y=self._wheel_size / 2,
            radius=wheel.geometry.radius,
        )
        colors = [self.app.prize_store.color_for(i) for i in range(len(wheel.prizes))]

        clear(self._wheel_buffer, self.config.bg_color)
        render_wheel(self._wheel_buffer, wheel.rotation, len(wheel.prizes), local, colors)

        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(np.transpose(self._wheel_buffer, (1, 0, 2)))
        self._screen.blit(surface, (offset_x, offset_y))

        for label in label_positions(wheel.rotation, len(wheel.prizes), wheel.geometry):
            text = self._font.render(wheel.prizes[label.index], True, (255, 255, 255))
            degrees = -np.degrees(label.angle + (np.pi if label.flipped else 0.0))
            rotated = pygame.transform.rotate(text, degrees)
            rect = rotated.get_rect(center=(label.x, label.y))
            self._screen.blit(rotated, rect)

    def _render_banner(self) -> None:
        if not self._banner:
            return
        text = self._font.render(self._banner, True, self._banner_color)
        x = self.app.wheel.geometry.center_x - text.get_width() / 2
        self._screen.blit(text, (x, self.config.height - 40))

    def _render_history_panel(self) -> None:
        panel_x = self.config.width - 300
        rect = pygame.Rect(panel_x, 20, 280, self.config.height - 40)
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=8)

        title = self._font.render(f"History ({len(self.app.history)})", True, self.config.text_color)
        self._screen.blit(title, (panel_x + 12, 30))

        records = self.app.history.records
        if not records:
            empty = self._small_font.render("No draws yet", True, self.config.text_color)
            self._screen.blit(empty, (panel_x + 12, 70))
            return

        y = 70
        for record in records:
            if y > rect.bottom - 24:
                break
            pygame.draw.circle(self._screen, hex_to_rgb(record.color), (panel_x + 20, y + 9), 6)
            name = self._small_font.render(record.name, True, self.config.text_color)
            stamp = self._small_font.render(record.time_label, True, (148, 163, 184))
            self._screen.blit(name, (panel_x + 36, y))
            self._screen.blit(stamp, (rect.right - stamp.get_width() - 12, y))
            y += 24

    def _render_debug_overlay(self) -> None:
        wheel = self.app.wheel
        lines = [
            f"FPS: {self._clock.get_fps():.0f}" if self._clock else "FPS: -",
            f"Phase: {wheel.phase.name}",
            f"Rotation: {wheel.rotation:.3f}",
            f"Velocity: {wheel.angular_velocity:.3f}",
            f"Settle in: {wheel.estimate_settle_time():.1f}s",
            f"Pointer: #{wheel.winning_index()}",
        ]
        for i, line in enumerate(lines):
            text = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(text, (10, 10 + i * 18))

    # -- Loop ----------------------------------------------------------

    async def run(self) -> None:
        """Main loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            # One fixed physics step per frame
            self.app.tick()
            if self._clock:
                self.app.event_bus.queue_event(tick_event(self._clock.get_time() / 1000.0, self._frame_count))

            await self.app.event_bus.process_queue()
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)
            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self.app.event_bus.emit(Event(EventType.SHUTDOWN))
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
