#!/usr/bin/env python3
"""
Start script for the n8n node types API
"""

import os
import sys
import subprocess
import argparse
from importlib import metadata

# Set default log level for production
if 'LOG_LEVEL' not in os.environ:
    os.environ['LOG_LEVEL'] = 'WARNING'

SERVER_DISTRIBUTIONS = ("fastapi", "uvicorn", "pydantic", "n8n-node-types")

def check_requirements(distributions=SERVER_DISTRIBUTIONS):
    """Report the installed version of each server dependency"""
    missing = []
    for name in distributions:
        try:
            print(f"✅ {name} {metadata.version(name)}")
        except metadata.PackageNotFoundError:
            print(f"❌ {name} is not installed")
            missing.append(name)

    if missing:
        print("Install requirements with: pip install -e .")
        return False
    return True

def build_command(args):
    cmd = [
        sys.executable, "-m", "uvicorn",
        "n8n_node_types.app:app",
        f"--host={args.host}",
        f"--port={args.port}",
        f"--log-level={os.environ['LOG_LEVEL'].lower()}"
    ]
    if args.reload:
        cmd.append("--reload")
    return cmd

def main(argv=None):
    parser = argparse.ArgumentParser(description="Start the n8n node types API")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Host to bind to")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")), help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument("--skip-checks", action="store_true", help="Skip dependency checks")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging (DEBUG level)")
    parser.add_argument("--quiet", action="store_true", help="Minimal logging (ERROR level only)")

    args = parser.parse_args(argv)

    # Set logging level based on arguments
    if args.verbose:
        os.environ['LOG_LEVEL'] = 'DEBUG'
    elif args.quiet:
        os.environ['LOG_LEVEL'] = 'ERROR'

    print("🚀 Starting n8n Node Types API")
    print("=" * 40)

    if not args.skip_checks:
        print("Running pre-flight checks...")
        if not check_requirements():
            sys.exit(1)
        print("=" * 40)

    cmd = build_command(args)

    print(f"Starting server at http://{args.host}:{args.port}")
    print("Press Ctrl+C to stop")
    print("=" * 40)

    try:
        subprocess.run(cmd)
    except KeyboardInterrupt:
        print("\n👋 Server stopped")

if __name__ == "__main__":
    main()
