#!/usr/bin/env python3
"""
Programme planner CLI: preview rotations and assessment slots in the terminal
and optionally write them to a workbook for printing.

Usage:
  # Four workshops, four groups, 40-minute rounds from 09:00
  python run_planner.py workshops --workshops "Airway" "ECG" "IV Access" "Splinting" \
      --start 09:00 --duration 40 --out "Day 1 Workshops.xlsx"

  # Practical session, 2 stations shared by four groups
  python run_planner.py stations --stations 2 --slots 4 --names "Skills Lab" "Sim Room"

  # Assessment, 4 stations, cohort of 16
  python run_planner.py assessment --stations 4 --slots 4 --concurrent "Case Review" \
      --start 13:00 --out "Assessment.xlsx"
"""

import argparse
import sys

from programme.assessment import derive_candidate_assignments, plan_assessment_slots
from programme.catalogue import DEFAULT_GROUPS
from programme.errors import ValidationError
from programme.models import AssessmentConfig, RotationConfig, StationConfig
from programme.rotation import plan_group_rotation, plan_station_rotation
from programme.write_schedule import write_assessment_workbook, write_rotation_workbook


def _print_rotation(schedule):
    for rnd in schedule.rounds:
        print(f"Round {rnd.index} ({rnd.time_window})")
        for session in rnd.sessions:
            print(f"  {session.sub_activity:<30} {session.label}")


def cmd_workshops(args):
    """Plan a workshop rotation."""
    config = RotationConfig(
        sub_activity_names=tuple(args.workshops),
        rounds=args.rounds if args.rounds is not None else len(args.workshops),
        groups=tuple(args.groups),
        start_time=args.start,
        round_duration=args.duration,
    )
    schedule = plan_group_rotation(config)
    _print_rotation(schedule)
    if args.out:
        print(f"\nWriting rotation to: {write_rotation_workbook(schedule, args.out, 'Workshops')}")


def cmd_stations(args):
    """Plan a station rotation (scenario practice / practical session)."""
    config = StationConfig(
        number_of_stations=args.stations,
        number_of_time_slots=args.slots,
        groups=tuple(args.groups),
        station_names=tuple(args.names or ()),
        start_time=args.start,
        time_slot_duration=args.duration,
    )
    schedule = plan_station_rotation(config)
    _print_rotation(schedule)
    if args.out:
        print(f"\nWriting rotation to: {write_rotation_workbook(schedule, args.out, 'Stations')}")


def cmd_assessment(args):
    """Plan assessment slots and list each candidate's station and role."""
    config = AssessmentConfig(
        number_of_stations=args.stations,
        number_of_time_slots=args.slots,
        lead_assist_duration=args.lead_assist,
        assessed_observe_duration=args.assessed_observe,
        station_names=tuple(args.names or ()),
        concurrent_activity_name=args.concurrent,
        start_time=args.start,
        candidate_range_first=args.first_range,
        candidate_range_second=args.second_range,
    )
    slots = plan_assessment_slots(config)
    for slot in slots:
        print(f"Slot {slot.slot_index} ({slot.time_window}) phase {slot.phase}, "
              f"candidates {slot.scenario_range}")
        for station in slot.stations:
            pair = ", ".join(f"{c.candidate_number} {c.role.value}" for c in station.candidate_assignments)
            print(f"  {station.station_name:<20} {pair}")
        concurrent = slot.concurrent_activity
        print(f"  {concurrent.name:<20} candidates {concurrent.candidate_range}")
    if args.verbose:
        print("\nCandidate assignments:")
        for a in derive_candidate_assignments(slots):
            print(f"  #{a.absolute_candidate:<4} seat {a.candidate_number:<3} slot {a.time_slot} "
                  f"{a.station_name:<20} {a.role.value}")
    if args.out:
        print(f"\nWriting assessment to: {write_assessment_workbook(slots, args.out)}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Course programme planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", help="Command")

    # workshops
    p_ws = sub.add_parser("workshops", help="Plan a workshop rotation")
    p_ws.add_argument("--workshops", nargs="+", required=True, help="Workshop names")
    p_ws.add_argument("--rounds", type=int, default=None, help="Rounds (default: one per workshop)")
    p_ws.add_argument("--groups", nargs="+", default=list(DEFAULT_GROUPS))
    p_ws.add_argument("--start", default=None, help="Start time HH:MM")
    p_ws.add_argument("--duration", type=int, default=None, help="Minutes per round")
    p_ws.add_argument("--out", default=None, help="Write an .xlsx workbook")

    # stations
    p_st = sub.add_parser("stations", help="Plan a station rotation")
    p_st.add_argument("--stations", type=int, default=4)
    p_st.add_argument("--slots", type=int, default=4)
    p_st.add_argument("--names", nargs="+", default=None, help="Station names")
    p_st.add_argument("--groups", nargs="+", default=list(DEFAULT_GROUPS))
    p_st.add_argument("--start", default=None, help="Start time HH:MM")
    p_st.add_argument("--duration", type=int, default=None, help="Minutes per slot")
    p_st.add_argument("--out", default=None, help="Write an .xlsx workbook")

    # assessment
    p_as = sub.add_parser("assessment", help="Plan assessment slots")
    p_as.add_argument("--stations", type=int, default=4)
    p_as.add_argument("--slots", type=int, default=4)
    p_as.add_argument("--names", nargs="+", default=None, help="Station names")
    p_as.add_argument("--lead-assist", type=int, default=30, help="Minutes per Lead/Assist slot")
    p_as.add_argument("--assessed-observe", type=int, default=30, help="Minutes per Assessed/Observe slot")
    p_as.add_argument("--concurrent", required=True, help="Concurrent activity name")
    p_as.add_argument("--start", default=None, help="Start time HH:MM")
    p_as.add_argument("--first-range", default=None, help='Candidates at stations first, e.g. "1-8"')
    p_as.add_argument("--second-range", default=None, help='Candidates at stations second, e.g. "9-16"')
    p_as.add_argument("--verbose", action="store_true", help="List every candidate's slots")
    p_as.add_argument("--out", default=None, help="Write an .xlsx workbook")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    dispatch = {
        "workshops": cmd_workshops,
        "stations": cmd_stations,
        "assessment": cmd_assessment,
    }
    try:
        dispatch[args.command](args)
    except ValidationError as exc:
        print("Cannot plan:")
        for v in exc.violations:
            print(f"  {v}")
        sys.exit(1)


if __name__ == "__main__":
    main()
