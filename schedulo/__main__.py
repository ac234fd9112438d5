"""
Entry point for running Schedulo as a module.

Usage:
    python -m schedulo generate request.json -o timetable.json
    python -m schedulo validate request.json
    python -m schedulo view timetable.json --room R001
"""

from schedulo.cli import main

if __name__ == "__main__":
    main()
