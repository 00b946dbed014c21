"""
Snapshot Replay
===============

Runs a captured page-view snapshot through the timing pipeline and
prints whatever would have been sent to the transport.

RUN:
    python -m navtiming snapshot.json
    python -m navtiming snapshot.json --config config/navtiming.json --force
    python -m navtiming snapshot.json --save

SNAPSHOT FORMAT (JSON object, every key optional):
    timing       performance.timing markers (absent => no facility)
    navigation   {"type": 0, "redirectCount": 0}
    userAgent, protocol, loadStart, now, geo
    loadTimes    {"firstPaintTime": s, "firstPaintAfterLoadTime": s}
    config       page configuration, overridden by --config
"""

from __future__ import annotations
import sys
import json
import argparse
import random
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

from .config import HostConfig
from .contracts.base import BrowserEnvironment, RawTiming, is_numeric
from .reporter import NavigationTimingReporter
from .transport import RecordingTransport


def load_snapshot(path: Path) -> Dict[str, Any]:
    """
    Read a snapshot file and check its shape.

    Raises ValueError for anything the pipeline could not be handed:
    a non-object document or section, or a non-numeric clock reading.
    """
    with open(path, 'r', encoding='utf-8') as f:
        snapshot = json.load(f)

    if not isinstance(snapshot, dict):
        raise ValueError(f"{path}: expected a JSON object")

    for section in ('timing', 'navigation', 'config'):
        value = snapshot.get(section)
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"{path}: '{section}' must be a JSON object")
        snapshot[section] = value

    now = snapshot.get('now')
    if now is not None and not is_numeric(now):
        raise ValueError(f"{path}: 'now' must be a number")

    return snapshot


def environment_from_snapshot(snapshot: Dict[str, Any]) -> BrowserEnvironment:
    """Rebuild a BrowserEnvironment from its captured JSON form."""
    timing = None
    if isinstance(snapshot.get('timing'), dict):
        timing = RawTiming.from_mapping({
            'timing': snapshot['timing'],
            'navigation': snapshot.get('navigation') or {},
        })

    now = snapshot.get('now')
    load_times = snapshot.get('loadTimes')

    return BrowserEnvironment(
        timing=timing,
        user_agent=snapshot.get('userAgent', ''),
        protocol=snapshot.get('protocol', 'https:'),
        clock=(lambda: now) if now is not None else None,
        load_start=snapshot.get('loadStart'),
        geo=snapshot.get('geo'),
        load_times=(lambda: load_times) if load_times is not None else None
    )


def replay(
    snapshot: Dict[str, Any],
    config: HostConfig,
    save: bool = False,
    seed: Optional[int] = None
) -> RecordingTransport:
    transport = RecordingTransport()
    reporter = NavigationTimingReporter(
        transport,
        rng=random.Random(seed) if seed is not None else None
    )
    env = environment_from_snapshot(snapshot)

    reporter.on_load(env, config)
    if save:
        reporter.on_post_edit(env, config)

    return transport


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="navtiming",
        description="Replay a captured page-view snapshot through the timing pipeline"
    )
    parser.add_argument('snapshot', help='Path to snapshot JSON')
    parser.add_argument(
        '--config', '-c',
        default=None,
        help='Path to page configuration JSON (overrides the snapshot config)'
    )
    parser.add_argument(
        '--save',
        action='store_true',
        help='Also fire the post-edit signal (SaveTiming)'
    )
    parser.add_argument(
        '--force',
        action='store_true',
        help='Bypass sampling (sampling factor 1)'
    )
    parser.add_argument('--seed', type=int, default=None, help='Sampling RNG seed')

    args = parser.parse_args(argv)

    try:
        snapshot = load_snapshot(Path(args.snapshot))
        if args.config:
            config = HostConfig.load(Path(args.config))
        else:
            config = HostConfig.from_mapping(snapshot['config'] or {})
    except (OSError, ValueError) as e:
        print(f"navtiming: {e}", file=sys.stderr)
        return 2

    if args.force:
        config = replace(config, sampling_factor=1)
    if args.save and not config.post_edit:
        config = replace(config, post_edit=True)

    transport = replay(snapshot, config, save=args.save, seed=args.seed)

    for event in transport.events:
        print(json.dumps(event.to_dict(), indent=2, sort_keys=True))

    return 0


if __name__ == "__main__":
    sys.exit(main())
