#!/usr/bin/env python3
"""Simple runner script for the Media Scout API server."""

import sys


def main():
    # Defaults come from the packaged config
    overrides = []

    # Parse simple args
    args = sys.argv[1:]
    if "--help" in args or "-h" in args:
        print("""
Media Scout - extract image and video URLs from a web page

Usage:
    python run.py [options]

Options:
    --host HOST         Bind address (default: localhost)
    --port PORT         Server port (default: 8080)
    --render-url URL    Render service endpoint (default: $MEDIA_SCOUT_RENDER_SERVICE_URL)
    -h, --help          Show this help

Examples:
    python run.py
    python run.py --port 3000 --render-url http://localhost:3001/render
""")
        return

    for i, arg in enumerate(args):
        if arg == "--host" and i + 1 < len(args):
            overrides.append(f"server.host={args[i + 1]}")
        elif arg == "--port" and i + 1 < len(args):
            overrides.append(f"server.port={int(args[i + 1])}")
        elif arg == "--render-url" and i + 1 < len(args):
            overrides.append(f"extractor.render_service_url='{args[i + 1]}'")

    try:
        from media_scout.config import load_settings, setup_logging
        from media_scout.server import run_server
    except ImportError as e:
        print(f"Failed to import media_scout: {e}")
        print("\nInstall with:")
        print("  pip install -e .")
        sys.exit(1)

    settings = load_settings(overrides)
    setup_logging(settings.logging)

    print(f"""
Media Scout
  Render service: {settings.extractor.render_service_url or 'not configured (static only)'}
  Server: http://{settings.server.host}:{settings.server.port}
""")

    run_server(settings)


if __name__ == "__main__":
    main()
