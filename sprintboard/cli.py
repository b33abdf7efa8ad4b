"""Command-line interface for the sprint board."""

from __future__ import annotations

import argparse
from pathlib import Path

from sprintboard.config import BoardConfig, load_config
from sprintboard.domain.db import get_session, init_database
from sprintboard.domain.repositories import BoardSettingRepository, TeamCapacityRepository
from sprintboard.engine.greedy import GreedySprintPlanner
from sprintboard.io.payload import InvalidPayloadError, dumps_state, loads_state
from sprintboard.io.record_adapter import passthrough_fields
from sprintboard.io.store import TaskStore
from sprintboard.validator import summarize_plan, unscheduled_issues, validate_plan


def _open_store(cfg: BoardConfig):
    session = get_session(cfg.db_url)
    store = TaskStore(
        cfg.tasks_path,
        session=session,
        default_project_key=cfg.default_project_key,
        default_sprint_start=cfg.default_sprint_start,
    )
    return store, session


def _planner(cfg: BoardConfig) -> GreedySprintPlanner:
    return GreedySprintPlanner(default_capacity=cfg.default_capacity_hours, max_sprint=cfg.max_sprint)


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the settings database."""
    cfg = load_config(args.config)
    init_database(cfg.db_url, sprint_start=cfg.default_sprint_start)
    print(f"[OK] Database initialized: {cfg.db_url}")


def _cmd_show(args: argparse.Namespace) -> None:
    """Print the board, planned in memory (nothing is saved)."""
    cfg = load_config(args.config)
    store, session = _open_store(cfg)
    try:
        state = store.load_state()
        visible = BoardSettingRepository.get_visible_fields(session)
        print(f"Project {state.project_key}: {len(state.issues)} issues, next id {state.next_id}")
        for issue in state.issues:
            extra = passthrough_fields(issue, store.headers, visible)
            extra_str = "".join(f"  {k}={v}" for k, v in extra.items())
            print(f"  {issue.key or issue.id}  [{issue.status}/{issue.priority}]  {issue.title}{extra_str}")
        planned = _planner(cfg).make_plan(state.issues, state.team_capacity)
        print(summarize_plan(planned, state.team_capacity, state.sprint_start,
                             cfg.sprint_length_days, cfg.default_capacity_hours))
    finally:
        session.close()


def _cmd_replan(args: argparse.Namespace) -> None:
    """Recompute sprints and save the board."""
    cfg = load_config(args.config)
    store, session = _open_store(cfg)
    try:
        state = store.load_state()
        planner = _planner(cfg)
        planned = planner.make_plan(state.issues, state.team_capacity)
        validate_plan(planned, state.team_capacity, cfg.default_capacity_hours,
                      ceiling_ids=planner.ceiling_placements)
        for issue in unscheduled_issues(state.issues, planned):
            print(f"[WARN] Not planned (dependency cycle): {issue.key or issue.id}")
        print(summarize_plan(planned, state.team_capacity, state.sprint_start,
                             cfg.sprint_length_days, cfg.default_capacity_hours))
        if args.dry_run:
            print("[OK] Dry run, nothing written")
            return
        store.save_state(state)
        print(f"[OK] Planned {len(planned)} of {len(state.issues)} issues")
    except ValueError as e:
        print(f"[ERROR] Replan failed: {e}")
        raise SystemExit(1)
    finally:
        session.close()


def _cmd_export_json(args: argparse.Namespace) -> None:
    """Write the board state as JSON."""
    cfg = load_config(args.config)
    store, session = _open_store(cfg)
    try:
        state = store.load_state()
        Path(args.out).write_text(dumps_state(state), encoding="utf-8")
        print(f"[OK] Exported {len(state.issues)} issues to {args.out}")
    finally:
        session.close()


def _cmd_import_json(args: argparse.Namespace) -> None:
    """Replace the board with a JSON state payload."""
    cfg = load_config(args.config)
    store, session = _open_store(cfg)
    try:
        text = Path(args.source).read_text(encoding="utf-8")
        state = loads_state(text)
        # Load first so existing rows are matched and their extra columns kept
        store.load_state()
        store.save_state(state)
        print(f"[OK] Imported {len(state.issues)} issues from {args.source}")
    except InvalidPayloadError as e:
        print(f"[ERROR] Import failed: {e}")
        raise SystemExit(1)
    finally:
        session.close()


def _parse_capacity(item: str):
    name, sep, hours = item.rpartition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=HOURS, got {item!r}")
    try:
        value = float(hours)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Hours must be a number in {item!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"Hours must not be negative in {item!r}")
    return name, value


def _cmd_capacity(args: argparse.Namespace) -> None:
    """Show or edit the team capacity table."""
    cfg = load_config(args.config)
    session = get_session(cfg.db_url)
    try:
        for name, hours in args.set or []:
            TeamCapacityRepository.set_capacity(session, name, hours)
            print(f"[OK] {name}: {hours:g}h per sprint")
        table = TeamCapacityRepository.as_dict(session)
        if not table:
            print(f"No capacity entries (default {cfg.default_capacity_hours:g}h per sprint)")
        for name, hours in table.items():
            print(f"  {name}: {hours:g}h")
    finally:
        session.close()


def _cmd_fields(args: argparse.Namespace) -> None:
    """Show or edit the visible-field list."""
    cfg = load_config(args.config)
    session = get_session(cfg.db_url)
    try:
        if args.set is not None:
            fields = [f.strip() for f in args.set.split(",") if f.strip()]
            BoardSettingRepository.set_visible_fields(session, fields)
            print(f"[OK] Visible fields set ({len(fields)})")
        for name in BoardSettingRepository.get_visible_fields(session):
            print(f"  {name}")
    finally:
        session.close()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sprintboard",
        description="Plan tracker-exported issues into sprints"
    )
    
    # Global options
    parser.add_argument("--config", help="Path to config YAML or JSON (default: built-in defaults)")
    
    sub = parser.add_subparsers(dest="command", required=True)
    
    init = sub.add_parser("init-db", help="Initialize the settings database")
    init.set_defaults(func=_cmd_init_db)
    
    show = sub.add_parser("show", help="Show issues and the current plan")
    show.set_defaults(func=_cmd_show)
    
    rep = sub.add_parser("replan", help="Recompute sprints and save")
    rep.add_argument("--dry-run", action="store_true", help="Print the plan without writing")
    rep.set_defaults(func=_cmd_replan)
    
    exp = sub.add_parser("export-json", help="Export the board state as JSON")
    exp.add_argument("--out", required=True, help="Output JSON path")
    exp.set_defaults(func=_cmd_export_json)
    
    imp = sub.add_parser("import-json", help="Save a JSON board state to the export file")
    imp.add_argument("--from", dest="source", required=True, help="Input JSON path")
    imp.set_defaults(func=_cmd_import_json)
    
    cap = sub.add_parser("capacity", help="Show or edit team capacity")
    cap.add_argument("--set", nargs="+", type=_parse_capacity, metavar="NAME=HOURS")
    cap.set_defaults(func=_cmd_capacity)
    
    fld = sub.add_parser("fields", help="Show or edit visible export columns")
    fld.add_argument("--set", metavar="A,B,C", help="Comma-separated column names")
    fld.set_defaults(func=_cmd_fields)
    
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
