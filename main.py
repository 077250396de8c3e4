"""Resolve Luau module files to Roblox instance paths and suggest require statements.

Usage:
    python main.py index <workspace>
    python main.py resolve <workspace> src/Packages/Janitor.luau
    python main.py search <workspace> janitr --document src/Client/init.client.luau
"""

from require_resolver.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
