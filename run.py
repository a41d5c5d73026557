import argparse, logging
from dotenv import load_dotenv

load_dotenv()

from rich import print
from rich.logging import RichHandler
from rich.table import Table

from core import config
from core.budget import summarize
from core.errors import GenerationFailed
from core.models import TripPreferences
from core.pipeline import generate_itinerary
from core.session import PlannerSession
from services import currency as cur
from services.maps import map_link
from services.rates import RateCache
from services.storage import PlanStore, export_plan


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Generate a budgeted day-by-day itinerary.")
    p.add_argument("--days", type=int, required=True)
    p.add_argument("--budget", type=float, required=True)
    p.add_argument("--interest", action="append", default=[], dest="interests")
    p.add_argument("--group-size", type=int, default=2)
    p.add_argument("--start", default="Ranchi")
    p.add_argument("--stop", action="append", default=[], dest="stops")
    p.add_argument("--currency", default=config.BASE_CURRENCY, choices=config.SUPPORTED_CURRENCIES)
    p.add_argument("--save", action="store_true", help="append the plan to the saved plans")
    p.add_argument("--export", metavar="PATH", help="write the plan as JSON to PATH")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=config.LOG_LEVEL, format="%(message)s", handlers=[RichHandler(show_path=False)]
    )

    prefs = TripPreferences(
        duration=args.days,
        interests=set(args.interests),
        budget=args.budget,
        group_size=args.group_size,
        start_location=args.start,
        custom_stops=args.stops,
    )
    store = PlanStore()
    store.save_preferences(prefs)

    rates = RateCache()
    print("[cyan]→ Exchange rates…[/]")
    rates.refresh()

    print("[cyan]→ Itinerary…[/]")
    session = PlannerSession(prefs)
    try:
        itin = generate_itinerary(session)
    except GenerationFailed as e:
        print(f"[red]{e.user_message}[/]")
        return 1

    code = args.currency
    table = Table(title="Itinerary")
    for col in ("Day", "Time", "Activity", "Cost", "Map"):
        table.add_column(col)
    for d in itin.days:
        for a in d.activities:
            table.add_row(str(d.day), a.time_of_day.value, a.name,
                          cur.display(a.estimated_cost, code, rates), map_link(a.name))
        table.add_row("", "", f"[bold]Day {d.day} total[/]", cur.display(d.day_total, code, rates), "")
    print(table)

    s = summarize(itin, prefs.budget)
    colour = "red" if s.over_budget else "green"
    print(f"Total : {cur.display(s.trip_total, code, rates)} "
          f"(budget {cur.display(s.budget, code, rates)}, "
          f"[{colour}]remaining {cur.display(s.remaining, code, rates)}[/], {s.percent_used}% used)")

    if args.save:
        print(f"[green]Saved ({store.append_saved_plan(itin)} plans).[/]")
    if args.export:
        with open(args.export, "w", encoding="utf-8") as f:
            f.write(export_plan(itin))
        print(f"[green]Exported to {args.export}[/]")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
