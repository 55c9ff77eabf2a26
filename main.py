"""
Statecraft
Command-line runner: creates or loads a nation in a save slot and autoplays a
number of decisions through the full engine (issue pipeline, resolution,
crisis arcs, background ticks), then writes the save, a region map and an
HTML chronicle.
"""

import argparse
import json
import random
from pathlib import Path

from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.layout import Layout
from rich.panel import Panel

from config import GameConfig, GOVERNMENT_TYPES, GAME_MODES, BOUNDED_STATS, stat_label
from game import GameSession
from logger import setup_logger
from reporting import ReportGenerator
from storage import JsonFileNationStore

logger = None
console = Console()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the autoplay run."""
    parser = argparse.ArgumentParser(
        description="Persistent nation-state simulation driven by policy decisions"
    )
    parser.add_argument(
        "--user", type=str, default="player",
        help="Owner of the save slot (default: player)"
    )
    parser.add_argument(
        "--slot", type=int, choices=[1, 2, 3], default=1,
        help="Save slot to play (default: 1)"
    )
    parser.add_argument(
        "--name", type=str, default="Republic of Aurelia",
        help="Nation name when the slot is empty"
    )
    parser.add_argument(
        "--mode", choices=list(GAME_MODES), default="Eras",
        help="Game mode for a new nation (default: Eras)"
    )
    parser.add_argument(
        "--government", choices=list(GOVERNMENT_TYPES), default="Democratic Republic",
        help="Government type for a new nation"
    )
    parser.add_argument(
        "--turns", type=int, default=30,
        help="Number of decisions to autoplay (default: 30)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for reproducibility"
    )
    parser.add_argument(
        "--endpoint", type=str, default=None,
        help="External issue generator URL (default: offline content)"
    )
    parser.add_argument(
        "--data-dir", type=str, default="saves",
        help="Directory for save files (default: saves)"
    )
    parser.add_argument(
        "--output-dir", type=str, default="output",
        help="Directory for output files (default: output)"
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING",
        help="Logging verbosity level (default: WARNING)"
    )
    parser.add_argument(
        "--no-viz", action="store_true",
        help="Skip map and timeline rendering"
    )
    return parser.parse_args()


def create_dashboard(nation, turn, total_turns, crises, events):
    """Create a rich layout dashboard."""
    layout = Layout()
    layout.split_column(
        Layout(name="header", size=3),
        Layout(name="main", ratio=1),
        Layout(name="footer", size=3)
    )

    layout["header"].update(Panel(
        f"{nation.name} - {nation.era} - Turn {turn}/{total_turns}", style="bold blue"))

    table = Table(title="Indicators")
    table.add_column("Stat", style="cyan")
    table.add_column("Value", style="green")
    for stat in BOUNDED_STATS:
        table.add_row(stat_label(stat, nation.era), str(nation.stats[stat]))
    table.add_row("Population", f"{nation.stats['population']:,}")
    table.add_row("GDP per Capita", f"{nation.stats['gdp']:,}")

    crisis_table = Table(title="Crises")
    crisis_table.add_column("Crisis", style="red")
    crisis_table.add_column("Region")
    crisis_table.add_column("Stage")
    for arc in crises:
        crisis_table.add_row(arc.label, arc.region_name, f"{arc.stage}/{arc.max_stage} {arc.severity}")

    event_text = "\n".join([f"• {e}" for e in events[-10:]]) if events else "No decisions yet."

    layout["main"].split_row(
        Layout(Panel(table, title="Stats"), ratio=1),
        Layout(Panel(crisis_table, title="Map"), ratio=1),
        Layout(Panel(event_text, title="Chronicle", style="yellow"), ratio=2)
    )
    layout["footer"].update(Panel(f"{nation.issues_resolved} decisions resolved", style="italic"))

    return layout


def main():
    """Autoplay loop with a live dashboard and end-of-run reporting."""
    global logger
    args = parse_args()

    logger = setup_logger(level_name=args.log_level)

    rng = random.Random(args.seed)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    config = GameConfig(
        generator_endpoint=args.endpoint,
        data_dir=Path(args.data_dir),
        output_dir=output_dir,
    )
    store = JsonFileNationStore(config.data_dir, config)
    session = GameSession(config, store, rng=rng)

    nation = session.load_nation(args.user, args.slot)
    if nation is None:
        console.print(f"[bold green]Founding {args.name} in slot {args.slot}...[/bold green]")
        nation = session.create_nation(
            args.user, args.slot, args.name,
            game_mode=args.mode, government_type=args.government,
        )
    else:
        console.print(f"[bold green]Loaded {nation.name} ({nation.era}, turn {nation.issues_resolved})[/bold green]")

    snapshots = [{"turn": nation.issues_resolved, "stats": dict(nation.stats)}]
    events = list(session.nation.history_log)

    with Live(console=console, refresh_per_second=4) as live:
        for turn in range(args.turns):
            issue = session.generate_issue()
            option = rng.choice(issue.options)
            report = session.select_option(option.id)

            events.append(f"{report.issue_title}: {report.option_text}")
            if report.era_change:
                events.append(f"The nation enters the {report.era_change[1]}")
            events.extend(report.breakdowns)
            events.extend(session.tick())
            events = events[-20:]

            snapshots.append({"turn": session.nation.issues_resolved, "stats": dict(session.nation.stats)})
            live.update(create_dashboard(session.nation, turn + 1, args.turns, session.map_crises(), events))

    session.flush()
    nation = session.nation

    nation_file = output_dir / f"{nation.id}.json"
    with open(nation_file, 'w') as f:
        json.dump(nation.to_dict(), f, indent=2)
    console.print(f"[bold green]Nation saved to {nation_file}[/bold green]")

    map_image = None
    if not args.no_viz:
        from viz import Visualizer
        visualizer = Visualizer(config)
        map_path = visualizer.create_region_map(nation)
        visualizer.plot_stat_timeline(snapshots, output_dir / f"{nation.id}_timeline.png", nation.era)
        map_image = map_path.name

    reporter = ReportGenerator(config)
    report_path = reporter.generate_report(nation, output_dir, map_image)

    console.print(f"[bold green]Chronicle generated at: {report_path}[/bold green]")
    console.print("[bold blue]Run complete![/bold blue]")


if __name__ == "__main__":
    main()
