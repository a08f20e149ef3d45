# crossingguard

An arcade game in which you play a crossing guard. A line of kids walks
along the pavement towards a three-lane road, and cars come down the lanes
at random intervals. Tell the kids when to walk and when to stop so that
as many as possible get across safely.

## Installing

```
pip install .
```

The game needs `pygame`, which is installed with the package.

## Playing

Start the game with:

```
crossingguard
```

The command takes no options apart from `--help`.

The window opens on the menu, with buttons to start a game, open the
settings, read the help page, or quit.

Controls during a game:

| Key | Action                                   |
|-----|------------------------------------------|
| `A` | walk left                                |
| `D` | walk right                               |
| `J` | signal the kid next to you to walk       |
| `K` | signal the kid next to you to stop       |

Click the pause button in the top right corner to pause. The pause screen
lets you continue, open the settings, read the help, return to the menu or
quit. After a win you can go back to the menu or quit; after a loss you can
go back to the menu or start again.

## Rules

- Kids arrive in groups of five, ten kids in all.
- Each kid who reaches the far side is worth 200 points; the score slowly
  drains while the game runs.
- A kid kept waiting too long grows impatient, fusses, and walks off on
  their own after a while. A kid walking into a stopped kid ahead stops
  too, and starts again when the kid ahead moves on.
- A car at the crossing knocks you aside if it touches you and runs over
  any kid in its path.
- Five dead kids and the game is lost. Once every kid has crossed or died,
  you win if the score has reached 800, and lose otherwise.

## What the game does not do

- Everything is drawn as plain coloured rectangles and text; there are no
  sprites or background pictures.
- No music file comes with the package. The settings screen toggles music
  on and off, but music only plays when a file `resources/bgm1.mp3` exists
  in the directory the game is started from.
- There are no difficulty levels, saved scores or other settings.

## Using the game logic

The simulation runs without a window, which makes it easy to drive from
code:

```python
from crossingguard.game import Game

game = Game()
for now in range(0, 60_000, 50):
    game.tick(set(), now)
    if game.outcome() is not None:
        break
print(game.outcome(), game.labels())
```

`Game.tick(keys, now)` plays one frame with the given set of pressed keys
(`"a"`, `"d"`, `"j"`, `"k"`) at time `now` in milliseconds and returns the
next `Screen`. `Game.reset()` starts a fresh round and `Game.labels()`
gives the on-screen counter texts with their positions.

`crossingguard.kid`, `crossingguard.player` and `crossingguard.car` hold
the kids, the guard and the traffic; `crossingguard.app.App` wires them to a
pygame window.

## Running the tests

```
pip install .[test]
pytest
```