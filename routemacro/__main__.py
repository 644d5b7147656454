"""Entry point for running routemacro as a module: python -m routemacro.

This enables:
    python -m routemacro transform src/pages/users.vue
    python -m routemacro extract src/pages/users.vue --json
"""

from routemacro.api.cli.main import main

if __name__ == "__main__":
    main()
