"""
Main entry point for PyJoyUI.

This module provides the command line interface and the interactive demo loop
that drives a UIManager from pygame events.
"""

import sys
import argparse
from pathlib import Path

from . import __version__
from .config import get_config, get_settings
from .core.logging import configure_logging, get_logger, shutdown_logging
from .core.exceptions import setup_exception_handling, handle_error, handle_crash


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Set up command line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="pyjoyui",
        description="PyJoyUI - Page navigation and overlay widgets for pygame",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pyjoyui                          # Run the interactive demo
  pyjoyui --debug                  # Run in debug mode
  pyjoyui --config myconfig.json   # Use custom configuration
  pyjoyui --frames 150             # Run the scripted demo without a window
  pyjoyui --list-joysticks         # List available joysticks
  pyjoyui --version                # Show version information
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"PyJoyUI {__version__}"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with verbose logging"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="FILE",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (overrides config)"
    )

    parser.add_argument(
        "--frames",
        type=int,
        metavar="N",
        help="Run the scripted demo for N frames without opening a window"
    )

    parser.add_argument(
        "--list-joysticks",
        action="store_true",
        help="List available joysticks and exit"
    )

    return parser


def apply_command_line_overrides(args: argparse.Namespace) -> None:
    """
    Apply command line argument overrides to configuration.

    Args:
        args: Parsed command line arguments
    """
    config = get_config()

    if args.debug:
        config.set("app.debug", True)
        config.set("app.log_level", "DEBUG")

    if args.log_level:
        config.set("app.log_level", args.log_level)


def list_joysticks() -> None:
    """List available joysticks and their information."""
    import pygame

    pygame.init()
    try:
        joystick_count = pygame.joystick.get_count()
        print(f"Found {joystick_count} joystick(s):")

        if joystick_count == 0:
            print("  No joysticks detected. Make sure your controller is connected.")
            return

        for i in range(joystick_count):
            joystick = pygame.joystick.Joystick(i)
            joystick.init()

            print(f"  {i}: {joystick.get_name()}")
            print(f"      Axes: {joystick.get_numaxes()}")
            print(f"      Buttons: {joystick.get_numbuttons()}")
            print(f"      Hats: {joystick.get_numhats()}")
    finally:
        pygame.quit()


def initialize_application(args: argparse.Namespace) -> bool:
    """
    Initialize the PyJoyUI application.

    Args:
        args: Parsed command line arguments

    Returns:
        True if initialization successful, False otherwise
    """
    try:
        if args.config:
            config_path = Path(args.config)
            if not config_path.exists():
                print(f"Error: Configuration file '{args.config}' not found")
                return False

            from .config import Config, Settings, set_config, set_settings
            config = Config(config_path)
            set_config(config)
            set_settings(Settings(config))

        apply_command_line_overrides(args)

        settings = get_settings()
        configure_logging(log_level=settings.log_level)

        setup_exception_handling()

        logger = get_logger("main")
        logger.info("PyJoyUI application starting", extra={
            "version": __version__,
            "debug_mode": settings.debug_mode,
            "target_fps": settings.target_fps,
            "default_view_type": settings.default_view_type,
        })

        return True

    except Exception as e:
        print(f"Failed to initialize application: {e}")
        handle_error(e)
        return False


def run_headless(frames: int) -> int:
    """
    Run the scripted demo for a fixed number of frames.

    Returns:
        Exit code
    """
    from .demo import ScriptedRun, build_demo_manager

    settings = get_settings()
    manager = build_demo_manager()
    manager.awaken()

    performed = ScriptedRun(manager, dt=1.0 / settings.target_fps).run(frames)

    status = manager.get_status()
    print(f"PyJoyUI v{__version__} - scripted demo, {frames} frames")
    for step in performed:
        print(f"  - {step}")
    print(f"Current page: {status['current_page']}")
    print(f"History: {status['history']}  Future: {status['future']}")
    print(f"Visible widgets: {status['visible_widgets']}")
    print(f"View type: {status['view_type']}")
    return 0


def run_application() -> int:
    """
    Run the interactive demo.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    import pygame
    from .demo import DemoRenderer, build_demo_manager, dispatch_action

    logger = get_logger("main")
    settings = get_settings()

    pygame.init()
    try:
        screen = pygame.display.set_mode(settings.window_size)
        pygame.display.set_caption(f"{settings.app_name} {__version__}")
        joysticks = [pygame.joystick.Joystick(i) for i in range(pygame.joystick.get_count())]

        manager = build_demo_manager()
        manager.awaken()
        renderer = DemoRenderer(screen)
        clock = pygame.time.Clock()

        logger.info("Demo loop started", extra={"joysticks": len(joysticks)})

        running = True
        while running:
            dt = clock.tick(settings.target_fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    if manager.navigation.current_page is None:
                        running = False
                    else:
                        manager.close_page(manager.fade())
                else:
                    manager.presentation.handle_pygame_event(event)
                    dispatch_action(manager, event)

            manager.update(dt)
            renderer.draw(manager)
            pygame.display.flip()

        logger.info("Application shutdown requested")
        return 0

    except Exception as e:
        logger.critical("Critical error in main application", extra={
            "error": str(e),
            "error_type": type(e).__name__
        })
        handle_crash(e)
        return 1
    finally:
        pygame.quit()


def main() -> int:
    """
    Main entry point for PyJoyUI application.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = setup_argument_parser()
    args = parser.parse_args()

    try:
        if args.list_joysticks:
            list_joysticks()
            return 0

        if not initialize_application(args):
            return 1

        if args.frames is not None:
            return run_headless(args.frames)

        return run_application()

    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
        return 0
    except Exception as e:
        print(f"Unexpected error: {e}")
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
