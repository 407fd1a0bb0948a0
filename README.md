# cubcaster

A small first-person raycasting engine. It reads a `.cub` scene file, which describes
wall textures, floor and ceiling colours and a grid map. It then shows the scene in a
pygame window that you can walk around in.

## Installing

```
pip install .
```

To get the test dependencies as well, add the `test` extra:

```
pip install ".[test]"
```

## Running

```
cubcaster path/to/level.cub
```

The command takes exactly one argument, and the argument must name a file ending in
`.cub`. If the scene is invalid or a texture cannot be loaded, the program writes
`Error` and a reason to standard error, each on its own line, and exits with status 1.
A map wider than 1500 tiles or taller than 1000 tiles is rejected as well.

### Controls

| Input        | Action                                   |
|--------------|------------------------------------------|
| `W` / `S`    | move forward / backward                  |
| `A` / `D`    | strafe left / right                      |
| `←` / `→`    | turn left / right by 0.1 radian          |
| `↑` / `↓`    | face north / face south                  |
| mouse motion | turn in the direction of sideways motion |
| `Esc`        | quit                                     |

A key acts both when it is pressed and when it is released. If a move would end inside
a wall, the move is skipped. The window shows a minimap in its top-left corner, and a
fresh set of 70 random stars is scattered over the ceiling on every frame.

## The `.cub` format

The file starts with six identifier lines, in any order. The map follows them:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
111111
100101
1000N1
111111
```

- `NO`, `SO`, `WE` and `EA` give the paths of the wall textures. Any image that
  Pillow can open will do.
- `F` sets the floor colour and `C` the ceiling colour. Each is written as `R,G,B`,
  with digits only, exactly two commas, and every component between 0 and 255.
- Each identifier line holds a key and a single value, separated by spaces or tabs.
  Two identifier lines may not begin with the same character.
- The map starts at the first line that begins with `1`. It may contain only `0`
  (floor), `1` (wall), spaces, and exactly one player start: `N`, `S`, `E` or `W`.
  The letter sets the direction the player faces at the start.
- The map must be closed. A floor or player cell may not be in the first or last row,
  and may not touch a space or the end of its row.
- Empty lines are skipped. If the file's very first line is empty, the command exits
  quietly with status 0 and opens no window.

## Using it as a library

```python
from cubcaster.scene import load_scene
from cubcaster.player import Player
from cubcaster.raycast import cast_all

scene = load_scene("level.cub")
player = Player.spawn(scene.grid)
hits = cast_all(scene.grid, player, 320)
for hit in hits[:3]:
    print(hit.distance, hit.face, hit.texture_x)
```

The modules:

- `cubcaster.scene`: `parse_scene_text` parses a scene held in a string, and
  `load_scene` reads one from a file. Both return a `Scene` that holds `textures`,
  `floor`, `ceiling` and `grid`.
- `cubcaster.colors`: `parse_color` turns an `R,G,B` value into a `Color`.
- `cubcaster.grid`: `Grid` holds the map rows and runs the validity checks
  (`is_closed`, `has_valid_chars`, `validate`).
- `cubcaster.player`: `Player` provides movement and rotation (`handle_key`, `move`,
  `rotate`). `Key` names the keys the game uses.
- `cubcaster.raycast`: `cast_ray` and `cast_all` return `Hit` objects, and
  `wall_slice` computes the on-screen height of a wall column.
- `cubcaster.render`: `Canvas` and `Texture` hold the pixels, `render_frame` draws a
  whole frame, and smaller drawing functions draw the parts of one.
- `cubcaster.app`: `Game` ties the parts into an interactive window, and `main` is
  what the command runs.

Errors in a scene are raised as `cubcaster.errors.CubError`. If the scene text begins
with an empty line, `parse_scene_text` raises `cubcaster.scene.LeadingBlankLine`
instead.

## What it does not do

The game has walls, a floor, a ceiling and a minimap, and nothing else. There are no
sprites, doors, sound or saved state.