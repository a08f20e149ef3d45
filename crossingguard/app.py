"""Application shell: screens, buttons, the frame loop and the window."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .game import FRAME_MS, WINDOW_HEIGHT, WINDOW_WIDTH, Game, Screen
from .kid import KID_Y, KidFlag
from .player import PlayerFlag

TEXT_WIDE = 200
TEXT_NARROW = 100
BUTTON_HEIGHT = 50
PAUSE_BUTTON = (WINDOW_WIDTH - 120, 0, 120, 60)
RESOURCES = Path("resources")
MUSIC_FILE = RESOURCES / "bgm1.mp3"

BROWN = (128, 64, 0)
YELLOW = (255, 255, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GREY = (191, 187, 177)
ROAD = (90, 90, 90)


@dataclass(frozen=True)
class _Button:
    x: int
    y: int
    width: int
    height: int
    text: str

    def contains(self, pos: Tuple[int, int]) -> bool:
        px, py = pos
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height


def _stacked(row: int, text: str) -> _Button:
    """A wide button in the centred column, ``row`` button heights down."""
    return _Button(
        WINDOW_WIDTH // 2 - TEXT_WIDE // 2,
        WINDOW_HEIGHT // 2 - BUTTON_HEIGHT // 2 + row * BUTTON_HEIGHT,
        TEXT_WIDE,
        BUTTON_HEIGHT,
        text,
    )


_Action = Callable[[], None]


class App:
    """Screen state machine around one game round."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game if game is not None else Game()
        self.screen = Screen.MENU
        self.previous = Screen.MENU
        self.music_on = True
        self._last_tick: float = 0
        self._buttons: Dict[Screen, List[Tuple[_Button, _Action]]] = self._build_buttons()

    def _build_buttons(self) -> Dict[Screen, List[Tuple[_Button, _Action]]]:
        back = _Button(1000, 650, TEXT_NARROW, BUTTON_HEIGHT, "Back")
        music = _Button(500, 450, 150, BUTTON_HEIGHT, "Music")
        bottom_left = _Button(0, WINDOW_HEIGHT - 50, TEXT_WIDE, BUTTON_HEIGHT, "Menu")
        bottom_right_quit = _Button(WINDOW_WIDTH - 200, WINDOW_HEIGHT - 50, TEXT_WIDE, BUTTON_HEIGHT, "Quit")
        bottom_right_replay = _Button(
            WINDOW_WIDTH - 200, WINDOW_HEIGHT - 50, TEXT_WIDE, BUTTON_HEIGHT, "Restart"
        )
        return {
            Screen.MENU: [
                (_stacked(1, "Start"), self._start_game),
                (_stacked(2, "Settings"), lambda: self._go(Screen.SETTING)),
                (_stacked(3, "Help"), lambda: self._go(Screen.HELP)),
                (_stacked(4, "Quit"), lambda: self._go(Screen.OVER)),
            ],
            Screen.SETTING: [
                (music, self._toggle_music),
                (back, lambda: self._go(self.previous)),
            ],
            Screen.HELP: [
                (back, lambda: self._go(self.previous)),
            ],
            Screen.PAUSE: [
                (_stacked(0, "Continue"), lambda: self._go(Screen.GAME)),
                (_stacked(1, "Settings"), lambda: self._go(Screen.SETTING)),
                (_stacked(2, "Help"), lambda: self._go(Screen.HELP)),
                (_stacked(3, "Menu"), lambda: self._go(Screen.MENU)),
                (_stacked(4, "Quit"), lambda: self._go(Screen.OVER)),
            ],
            Screen.WIN: [
                (bottom_left, lambda: self._go(Screen.MENU)),
                (bottom_right_quit, self._finish),
            ],
            Screen.LOSE: [
                (bottom_left, lambda: self._go(Screen.MENU)),
                (bottom_right_replay, self._replay),
            ],
        }

    def _go(self, screen: Screen) -> None:
        if screen in (Screen.MENU, Screen.PAUSE):
            self.previous = screen
        self.screen = screen

    def _start_game(self) -> None:
        self.game.reset()
        self._go(Screen.GAME)

    def _replay(self) -> None:
        self.game.reset()
        self._go(Screen.GAME)

    def _finish(self) -> None:
        self.game.reset()
        self._go(Screen.OVER)

    def _toggle_music(self) -> None:
        self.music_on = not self.music_on

    def handle_click(self, pos: Tuple[int, int]) -> Screen:
        """React to a left click at ``pos``; return the screen shown afterwards."""
        if self.screen == Screen.GAME:
            x, y, w, h = PAUSE_BUTTON
            if x <= pos[0] <= x + w and 0 <= pos[1] <= y + h:
                self._go(Screen.PAUSE)
            return self.screen
        for button, action in self._buttons.get(self.screen, ()):
            if button.contains(pos):
                action()
                break
        return self.screen

    def frame(self, keys: Iterable[str], now: float) -> Screen:
        """Advance the game by one frame if it is running and a frame is due."""
        if self.screen == Screen.GAME and now - self._last_tick >= FRAME_MS:
            self._last_tick = now
            self._go(self.game.tick(keys, now))
        return self.screen

    # ----- window -----

    def run(self) -> None:
        """Open the window and play until the player quits."""
        import pygame

        pygame.init()
        surface = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("Crossing Guard Joe")
        font = pygame.font.Font(None, 36)
        clock = pygame.time.Clock()
        key_codes = {"j": pygame.K_j, "k": pygame.K_k, "a": pygame.K_a, "d": pygame.K_d}
        music_ready = self._load_music(pygame)
        playing = False
        try:
            while self.screen != Screen.OVER:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._go(Screen.OVER)
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        self.handle_click(event.pos)
                pressed = pygame.key.get_pressed()
                keys = {name for name, code in key_codes.items() if pressed[code]}
                self.frame(keys, pygame.time.get_ticks())
                if music_ready and self.music_on != playing:
                    if self.music_on:
                        pygame.mixer.music.play(-1)
                    else:
                        pygame.mixer.music.stop()
                    playing = self.music_on
                self._draw(pygame, surface, font)
                pygame.display.flip()
                clock.tick(60)
        finally:
            pygame.quit()

    @staticmethod
    def _load_music(pygame) -> bool:
        if not MUSIC_FILE.is_file():
            return False
        try:
            pygame.mixer.init()
            pygame.mixer.music.load(str(MUSIC_FILE))
        except pygame.error:
            return False
        return True

    def _draw(self, pygame, surface, font) -> None:
        surface.fill(WHITE if self.screen in (Screen.MENU, Screen.GAME) else GREY)
        if self.screen == Screen.GAME:
            self._draw_game(pygame, surface, font)
            return
        titles = {
            Screen.SETTING: "Coming soon",
            Screen.HELP: "J: go   K: stop   A: left   D: right",
            Screen.PAUSE: "Paused",
            Screen.WIN: "You win!",
            Screen.LOSE: "You lose",
        }
        title = titles.get(self.screen)
        if title:
            surface.blit(font.render(title, True, BLACK), (500, 200 if self.screen != Screen.SETTING else 500))
        mouse = pygame.mouse.get_pos()
        for button, action in self._buttons.get(self.screen, ()):
            text = button.text
            if action == self._toggle_music:
                text = "Music on" if self.music_on else "Music off"
            colour = YELLOW if button.contains(mouse) else BROWN
            rect = pygame.Rect(button.x, button.y, button.width, button.height)
            pygame.draw.rect(surface, colour, rect)
            label = font.render(text, True, BLACK)
            surface.blit(label, label.get_rect(center=rect.center))

    def _draw_game(self, pygame, surface, font) -> None:
        pygame.draw.rect(surface, ROAD, pygame.Rect(400, 0, 400, WINDOW_HEIGHT))
        pygame.draw.rect(surface, WHITE, pygame.Rect(0, 590, WINDOW_WIDTH, 50))
        for text, pos in self.game.labels().values():
            surface.blit(font.render(text, True, BLACK), pos)
        kid_colours = {
            KidFlag.MOVE: (0, 160, 0),
            KidFlag.STOP: (0, 0, 200),
            KidFlag.FUSS: (220, 120, 0),
            KidFlag.DEAD: (200, 0, 0),
        }
        for kid in self.game.kids:
            rect = pygame.Rect(kid.x, int(kid.y), 30, 40)
            pygame.draw.rect(surface, kid_colours[kid.flag], rect)
            if kid.selected:
                pygame.draw.rect(surface, YELLOW, rect, 3)
        for car in self.game.traffic.cars:
            pygame.draw.rect(surface, (30, 30, 160), pygame.Rect(car.x, car.y, car.width, 105))
        player = self.game.player
        hit = player.flag in (PlayerFlag.HIT_LEFT, PlayerFlag.HIT_RIGHT)
        pygame.draw.rect(surface, (200, 0, 0) if hit else (255, 140, 0), pygame.Rect(player.x, KID_Y - 80, 50, 130))
        x, y, w, h = PAUSE_BUTTON
        rect = pygame.Rect(x, y, w, h)
        pygame.draw.rect(surface, BROWN, rect)
        label = font.render("Pause", True, YELLOW)
        surface.blit(label, label.get_rect(center=rect.center))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game window."""
    parser = argparse.ArgumentParser(prog="crossingguard", description="Help the children cross the road.")
    parser.parse_args(argv)
    App().run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())