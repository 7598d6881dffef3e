"""
Desktop window using pygame.

Drives a RaceSession from the pygame frame clock and keyboard / mouse,
and blits the rendered buffer scaled up to the window.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..config.settings import Settings, get_settings
from ..core.events import Event, EventBus, EventType
from ..graphics.renderer import to_surface_array
from ..session import RaceSession

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Window configuration."""
    title: str = "Steeplechase"
    scale: int = 2
    fps: int = 60

    # Colors
    text_color: tuple[int, int, int] = (255, 255, 255)
    shadow_color: tuple[int, int, int] = (0, 0, 0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        sim = settings.simulator
        return cls(title=sim.title, scale=sim.scale, fps=sim.fps)


class SimulatorWindow:
    """
    Window that plays the race.

    Keyboard Mapping:
        SPACE / UP: Jump (hold for a longer, flatter jump)
        Mouse button: Same as SPACE
        SPACE after game over: Restart
        S: Capture screenshot
        ESC / Q: Exit
    """

    JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)

    def __init__(
        self,
        config: WindowConfig | None = None,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.config = config or WindowConfig.from_settings(self.settings)
        self.event_bus = event_bus or EventBus()
        self.session = RaceSession(self.settings, self.event_bus)

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0

        self.event_bus.subscribe(EventType.RUN_ENDED, self._on_run_ended)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        world = self.settings.world
        self._screen = pygame.display.set_mode(
            (world.width * self.config.scale, world.height * self.config.scale),
            pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.Font(None, 18 * self.config.scale)
        self._big_font = pygame.font.Font(None, 36 * self.config.scale)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                if event.key in self.JUMP_KEYS:
                    self.session.release()

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.session.press()

            elif event.type == pygame.MOUSEBUTTONUP:
                self.session.release()

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_s:
            self._capture_screenshot()
        elif key in self.JUMP_KEYS:
            # Key repeat is off, so a held key only presses once
            self.session.press()

    def _on_run_ended(self, event: Event) -> None:
        logger.info(f"Game over: score {event.data.get('score')}, best {event.data.get('high_score')}")

    def _render(self) -> None:
        """Render the scene and the text overlay."""
        if not self._screen:
            return

        buffer = self.session.render()
        surface = pygame.surfarray.make_surface(to_surface_array(buffer))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        engine = self.session.engine
        self._draw_text(self._font, f"Score: {engine.score}", (10 * self.config.scale, 10 * self.config.scale))
        if engine.high_score:
            self._draw_text(
                self._font,
                f"Best: {engine.high_score}",
                (10 * self.config.scale, 28 * self.config.scale),
            )

        if engine.is_ended:
            height = self._screen.get_height()
            self._draw_centered(self._big_font, "Game Over!", height // 2)
            if self.session.can_restart:
                self._draw_centered(self._font, "Press Space to Restart", height // 2 + 40 * self.config.scale)

        pygame.display.flip()

    def _draw_text(self, font: pygame.font.Font | None, text: str, pos: tuple[int, int]) -> None:
        if not font or not self._screen:
            return
        shadow = font.render(text, True, self.config.shadow_color)
        self._screen.blit(shadow, (pos[0] + 1, pos[1] + 1))
        self._screen.blit(font.render(text, True, self.config.text_color), pos)

    def _draw_centered(self, font: pygame.font.Font | None, text: str, y: int) -> None:
        if not font or not self._screen:
            return
        text_width = font.size(text)[0]
        self._draw_text(font, text, ((self._screen.get_width() - text_width) // 2, y))

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            # Frame delta from the clock drives the simulation
            if self._clock:
                self.session.update(float(self._clock.get_time()))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
