# --- maze_maker.py ---
import argparse
import logging
import sys

from maze_lib import pipeline, schema
from maze_lib.config import (
    MazeConfig,
    load_settings,
    parse_break_count,
    parse_heatmap_spec,
    parse_mask_spec,
)
from maze_lib.errors import ConfigurationError, MazeError
from maze_lib.log_utils import setup_logging
from maze_lib.rendering import ascii_renderer, svg_renderer


def run_rendering(result: pipeline.MazeResult, output_path: str, options: dict):
    """Generates and saves an SVG from a MazeResult."""
    log = logging.getLogger("maze.main")
    log.info("Rendering SVG for '%s'...", output_path)
    svg_content = svg_renderer.render_svg(result, options)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(svg_content)
    log.info("Successfully saved SVG to '%s'", output_path)


def get_cli_args(argv=None):
    """Configures and parses command-line arguments."""
    p = argparse.ArgumentParser(
        description="Generates mazes of triangular, square or hexagonal rooms as SVG."
    )
    p.add_argument("path", metavar="PATH", help="Path of the SVG file to write.")
    p.add_argument(
        "-m",
        "--method",
        required=True,
        help="Generation method (recursive-backtracker, prim, wilson, braid, clear; "
        "aliases: winding, depth-first, branching). A comma-separated list splits the "
        "maze into one random region per method.",
    )
    p.add_argument("--walls", help="Number of walls per room: 3, 4 or 6 (default: 4).")
    p.add_argument("--width", type=int, help="Number of rooms per row.")
    p.add_argument("--height", type=int, help="Number of rows.")
    p.add_argument("--seed", type=int, help="Seed for the random number generator.")
    p.add_argument(
        "--mask",
        metavar="PATH,THRESHOLD",
        help="Only keep rooms whose image luminosity is at least THRESHOLD (0-1).",
    )
    p.add_argument(
        "--invert-mask",
        action="store_true",
        help="Keep the rooms below the mask threshold instead.",
    )
    p.add_argument(
        "--break",
        nargs="?",
        const="1",
        default="0",
        dest="break_count",
        metavar="COUNT",
        help="Open COUNT extra walls after generation to add loops (default: 1).",
    )
    p.add_argument("--config", metavar="FILE", help="INI file with rendering defaults.")

    g_out = p.add_argument_group("Rendering")
    g_out.add_argument("--scale", type=float, help="Pixels per room unit (default: 10).")
    g_out.add_argument("--margin", type=float, help="Margin around the maze (default: 10).")
    g_out.add_argument(
        "--solve",
        nargs="?",
        const="",
        metavar="COLOR",
        help="Draw the solution, optionally in the given #RRGGBB or #AARRGGBB color.",
    )
    g_out.add_argument(
        "--heat-map",
        metavar="KIND[,FROM[,TO]]",
        help="Color rooms by heat: distance, vertical, horizontal or full.",
    )
    g_out.add_argument("--background", metavar="PATH", help="Color rooms from an image.")
    g_out.add_argument(
        "--ratio",
        type=float,
        metavar="PX",
        help="Pixels of the background per room; derives the maze size from the image.",
    )
    g_out.add_argument("--text", help="Overlay text rendered into the rooms.")
    g_out.add_argument("--save-json", metavar="FILE", help="Save a JSON snapshot of the maze.")
    g_out.add_argument(
        "--from-json",
        metavar="FILE",
        help="Render a previously saved snapshot instead of generating a maze.",
    )

    # Logging arguments
    g_log = p.add_argument_group("Logging & Output")
    g_log.add_argument("-v", "--verbose", action="store_true", help="Enable INFO logging.")
    g_log.add_argument("--color-logs", action="store_true", help="Enable colored logging.")
    g_log.add_argument("--log-file", metavar="FILE", help="Redirect log output to a file.")
    g_log.add_argument(
        "--ascii-debug",
        action="store_true",
        help="Log an ASCII view of square-room mazes for debugging.",
    )
    g_log.add_argument(
        "-d",
        "--debug",
        nargs="?",
        const="all",
        dest="debug_topics",
        metavar="TOPICS",
        help="Enable DEBUG logging (all,config,grid,mask,image,generate,solve,"
        "heatmap,break,render,schema).",
    )
    return p.parse_args(argv)


def _setting_float(settings: dict, section: str, key: str) -> float:
    value = settings[section][key]
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid value for [{section}] {key}: {value!r}") from None


def build_config(args, settings: dict) -> MazeConfig:
    """Combines parsed arguments with the settings file; arguments win."""
    render = settings["render"]
    config = MazeConfig(
        method=args.method,
        width=args.width,
        height=args.height,
        shape=args.walls or settings["maze"]["walls"],
        seed=args.seed,
        break_count=parse_break_count(args.break_count),
        background_path=args.background,
        ratio=args.ratio,
        text=args.text,
        scale=args.scale if args.scale is not None else _setting_float(settings, "maze", "scale"),
        margin=(
            args.margin if args.margin is not None else _setting_float(settings, "maze", "margin")
        ),
        wall_color=render["wall_color"],
        wall_width=_setting_float(settings, "render", "wall_width"),
        text_color=render["text_color"],
        mask_invert=args.invert_mask,
    )
    if args.mask:
        config.mask_path, config.mask_threshold = parse_mask_spec(args.mask)
    if args.solve is not None:
        config.solve = True
        config.solve_color = args.solve or render["solve_color"]
    if args.heat_map:
        config.heatmap = parse_heatmap_spec(args.heat_map, settings)
    return config


def main(argv=None) -> int:
    """Main entry point for the maze-maker CLI."""
    args = get_cli_args(argv)
    log_level = logging.INFO if args.verbose else logging.WARNING
    if args.debug_topics:
        log_level = logging.DEBUG

    setup_logging(log_level, args.color_logs, args.debug_topics, args.log_file)
    log = logging.getLogger("maze.main")

    log.info("--- Maze Maker CLI Initialized ---")
    log.debug("Arguments received: %s", vars(args))

    try:
        settings = load_settings(args.config)
        config = build_config(args, settings)
        if args.from_json:
            log.info("Loading maze from '%s'...", args.from_json)
            result = pipeline.replay(schema.load_json(args.from_json), config)
        else:
            result = pipeline.run_pipeline(config)

        grid = result.grid
        log.info("--- Maze Results ---")
        log.info(
            "Method '%s' with seed %s: %d rooms, %d open walls.",
            result.method,
            result.seed,
            grid.room_count(),
            grid.open_wall_count(),
        )

        if args.ascii_debug:
            log.info("--- ASCII Debug Output ---")
            renderer = ascii_renderer.ASCIIRenderer()
            renderer.render_grid(grid, result.path)
            log.info("\n%s", renderer.get_output(), extra={"raw": True})
            log.info("--- End ASCII Debug Output ---")

        if args.save_json:
            schema.save_json(result, args.save_json)

        render_opts = {
            "scale": config.scale,
            "margin": config.margin,
            "wall_color": config.wall_color,
            "wall_width": config.wall_width,
            "solve_color": config.solve_color,
            "text_color": config.text_color,
        }
        run_rendering(result, args.path, render_opts)
    except MazeError as e:
        log.critical("%s", e)
        return 1
    except OSError as e:
        log.critical("I/O error: %s", e)
        return 1

    log.info("--- Processing complete. ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
