#!/usr/bin/env python3
"""Start script that properly handles the PORT environment variable."""

import os
import sys
import subprocess

DEFAULT_PORT = 8000


def resolve_port(value):
    """Port from the PORT environment value, falling back to 8000."""
    if not value:
        return DEFAULT_PORT
    try:
        return int(value)
    except ValueError:
        print(f"Warning: Invalid PORT value '{value}', using default {DEFAULT_PORT}", file=sys.stderr)
        return DEFAULT_PORT


def build_command(port):
    return [
        sys.executable,
        "-m",
        "uvicorn",
        "delivery_fees.main:app",
        "--host",
        "0.0.0.0",
        "--port",
        str(port),
    ]


def main():
    port = resolve_port(os.environ.get("PORT"))

    # Set PYTHONPATH to include src directory
    pythonpath = os.environ.get("PYTHONPATH", "")
    src_path = os.path.abspath("src")
    if not os.path.isdir(src_path):
        print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
        src_path = os.getcwd()

    if pythonpath:
        os.environ["PYTHONPATH"] = f"{src_path}:{pythonpath}"
    else:
        os.environ["PYTHONPATH"] = src_path

    print(f"Starting server on port {port}...", file=sys.stderr)
    print(f"PYTHONPATH={os.environ['PYTHONPATH']}", file=sys.stderr)
    return subprocess.call(build_command(port))


if __name__ == "__main__":
    sys.exit(main())
