"""Composition root for the siteog image service.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Dependency injection
- Entry point selection (server, build, CLI)
"""

import asyncio
import json
import logging
import sys
from typing import Any

from siteog.adapters.cli.commands import CLICommandHandler
from siteog.adapters.content.markdown import MarkdownPostIndex
from siteog.adapters.font.file import FileFontAsset
from siteog.adapters.font.http import HttpFontAsset
from siteog.adapters.renderer.pillow import PillowCardRenderer
from siteog.adapters.web.http_server import OGHTTPServer
from siteog.config import Settings, load_settings
from siteog.core.catalog import PostCatalog
from siteog.core.ports import FontAssetPort
from siteog.core.responder import ImageResponder


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for listing and rendering commands.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            # Read command from stdin in a thread to avoid blocking
            command_line = await loop.run_in_executor(None, input, "siteog> ")
            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            try:
                result = await _execute_cli_command(cli_handler, command, args)
                print(json.dumps(result, indent=2, default=str))
            except ValueError as e:
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))

        except EOFError:
            # Ctrl+D to exit
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


async def _execute_cli_command(
    cli_handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Execute a CLI command.

    Args:
        cli_handler: CLICommandHandler instance.
        command: Command name.
        args: Command arguments.

    Returns:
        Command result dictionary.

    Raises:
        ValueError: If command is not recognized or a parameter is missing.
    """
    if command == "paths":
        return await cli_handler.list_paths(route=args.get("route", "slug"))

    elif command == "render":
        if "output" not in args:
            raise ValueError("Missing required parameter: output")
        return await cli_handler.render_slug(slug=args.get("slug", ""), output=args["output"])

    elif command == "render_title":
        if "output" not in args:
            raise ValueError("Missing required parameter: output")
        return await cli_handler.render_title(title=args.get("title", ""), output=args["output"])

    elif command == "build":
        if "output_dir" not in args:
            raise ValueError("Missing required parameter: output_dir")
        return await cli_handler.build(output_dir=args["output_dir"])

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  paths
    List the static paths of an OG route family.
    Optional: route ("slug" or "title", default "slug")

    Example: paths {"route": "title"}

  render
    Render the card of a post to a file.
    Required: output
    Optional: slug (placeholder card when missing or unknown)

    Example: render {"slug": "hello-world", "output": "hello-world.png"}

  render_title
    Render the card of a literal title to a file.
    Required: output
    Optional: title

    Example: render_title {"title": "Hello World", "output": "hello.png"}

  build
    Render every post card into <output_dir>/og/<slug>.png.
    Required: output_dir

    Example: build {"output_dir": "./dist"}

  help
    Show this help message.

  exit
    Exit the CLI.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )


def build_font_asset(settings: Settings) -> FontAssetPort:
    """Select the font adapter for the configured font source."""
    if settings.font_source == "http":
        if not settings.font_url:
            raise ValueError("font_source is 'http' but FONT_URL is not set")
        return HttpFontAsset(
            url=settings.font_url,
            timeout=settings.font_fetch_timeout_seconds,
        )
    return FileFontAsset(settings.font_path)


def build_services(settings: Settings) -> tuple[PostCatalog, ImageResponder, FontAssetPort]:
    """Instantiate adapters and core services from settings.

    Returns:
        The post catalog, the image responder and the font adapter (which
        the caller closes on shutdown when it holds a connection pool).
    """
    index = MarkdownPostIndex(settings.content_dir)
    catalog = PostCatalog(index, directory=settings.blog_directory)
    font = build_font_asset(settings)
    responder = ImageResponder(
        catalog=catalog,
        renderer=PillowCardRenderer(),
        font=font,
        site=settings.site_config(),
        show_logo=settings.og_show_logo,
        show_byline=settings.og_show_byline,
        cache_max_age=settings.og_cache_max_age,
    )
    return catalog, responder, font


async def bootstrap() -> int:
    """Load configuration, wire adapters, and start the application.

    This is the composition root: the single place where all components
    are instantiated and wired together.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate adapters and core services
    4. Select and start run mode

    Returns:
        Process exit code.
    """
    # Step 1: Load configuration
    settings = load_settings()

    # Step 2: Configure logging
    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info(f"Loading siteog for {settings.site_config().url}...")

    # Step 3: Instantiate adapters and core services
    catalog, responder, font = build_services(settings)
    logger.info(
        f"Content: {settings.content_dir}/{settings.blog_directory}, "
        f"font source: {settings.font_source}"
    )

    # Step 4: Select run mode and start
    logger.info(f"Starting in {settings.run_mode} mode...")
    exit_code = 0

    try:
        if settings.run_mode == "server":
            http_server = OGHTTPServer(
                responder=responder,
                host=settings.server_host,
                port=settings.server_port,
                request_timeout=settings.request_timeout_seconds,
            )
            await http_server.start()

            # Keep the server running
            try:
                while True:
                    await asyncio.sleep(1)
            finally:
                await http_server.stop()

        elif settings.run_mode == "build":
            cli_handler = CLICommandHandler(catalog, responder)
            result = await cli_handler.build(output_dir=settings.build_output_dir)
            if result["status"] != "success":
                logger.error(f"Build finished with errors: {result.get('failed') or result.get('message')}")
                exit_code = 1

        elif settings.run_mode == "cli":
            cli_handler = CLICommandHandler(catalog, responder)
            await _run_cli_interactive(cli_handler)

        else:
            logger.error(f"Unknown run mode: {settings.run_mode}")
            exit_code = 1

    finally:
        # Close font adapter if it has a close method
        if hasattr(font, "close"):
            await font.close()

    return exit_code


def main() -> None:
    """Application entry point.

    Loads configuration, wires adapters, initializes core services,
    and starts the configured run mode (server, build, or CLI).

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error, or a build with failures
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        exit_code = asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Graceful shutdown completed")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
