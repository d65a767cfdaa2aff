#!/usr/bin/env python3
"""Command-line interface for the U-Bahn navigator."""

import sys

from .config import LOG_LEVEL
from .lines import get_catalog
from .logging_config import configure_logging
from .routing import get_route_finder, plan_route


def print_banner():
    """Print the welcome banner."""
    print("""
╔═══════════════════════════════════════════════════════════╗
║              U-Bahn Navigator                             ║
║                                                           ║
║  Type a trip as:  Origin -> Destination                   ║
║    e.g. Otisstraße -> Hansaplatz                          ║
║                                                           ║
║  Commands:                                                ║
║    /lines      - List all lines                           ║
║    /line U6    - List the stations of a line              ║
║    /quit       - Exit the program                         ║
╚═══════════════════════════════════════════════════════════╝
""")


def show_lines():
    for line in get_catalog():
        print(f"  {line.name:<4} {line.color}  {line.stations[0]} - {line.stations[-1]}")


def show_line(name: str):
    line = get_catalog().get_line(name.strip().upper())
    if not line:
        print(f"\nUnknown line: {name}")
        return
    print(f"\n{line.name} ({len(line.stations)} stations):")
    for station in line.stations:
        print(f"  {station}")


def show_route(user_input: str):
    origin, _, destination = user_input.partition("->")
    origin, destination = origin.strip(), destination.strip()
    if not origin or not destination:
        print("\nPlease enter a trip as: Origin -> Destination")
        return

    result = plan_route(get_route_finder(), origin, destination)
    if not result.ok:
        print(f"\n{result.message}")
        return
    print(f"\nRoute from {origin} to {destination}:\n")
    print(result.route)


def main():
    """Run the interactive CLI, or the HTTP server with `serve`."""
    configure_logging(log_level=LOG_LEVEL)

    if sys.argv[1:2] == ["serve"]:
        from .api import run_server
        run_server()
        return

    print_banner()

    while True:
        try:
            user_input = input("\nTrip: ").strip()

            if not user_input:
                continue

            command = user_input.lower()
            if command in ["/quit", "/exit", "/q"]:
                print("\nGute Fahrt!")
                break

            if command == "/lines":
                show_lines()
            elif command.startswith("/line "):
                show_line(user_input[len("/line "):])
            else:
                show_route(user_input)

        except (KeyboardInterrupt, EOFError):
            print("\n\nGute Fahrt!")
            break


if __name__ == "__main__":
    main()
