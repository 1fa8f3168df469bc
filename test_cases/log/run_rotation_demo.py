"""
Module: run_rotation_demo.py
Location: test_cases/log/
Version: 0.1.0

Writes a numbered line every interval until interrupted. Rotate by hand:

    mv demo.log demo.log.1 && kill -HUP <pid>

The next line lands in a fresh demo.log.
"""
from __future__ import annotations

import argparse
import os
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from src.core.log.log_config import LogConfig, open_from_config
from src.core.log.log_exceptions import LogError
from src.core.log.prefix_logger import REPAIR_PREFIX, PrefixLogger


def main() -> int:
    parser = argparse.ArgumentParser(description="Leveled log rotation demo")
    parser.add_argument("--path", default="demo.log", help="log file, '' for stderr")
    parser.add_argument("--level", default="info")
    parser.add_argument("--signal", default="SIGHUP", help="rotation signal")
    parser.add_argument("--interval", type=float, default=1.0)
    args = parser.parse_args()

    config = LogConfig(path=args.path, level=args.level, rotate_signal=args.signal)
    try:
        writer = open_from_config(config)
    except (LogError, ValueError) as e:
        print(f"[Demo] cannot open log: {e}", file=sys.stderr)
        return 1

    repair = PrefixLogger(writer, REPAIR_PREFIX)
    print(f"[Demo] pid={os.getpid()} writing to {args.path or 'stderr'}; "
          f"send {config.resolved_signal().name} to rotate")

    seq = 0
    try:
        while True:
            writer.infof("tick %d", seq)
            if seq % 5 == 0:
                repair.warnf("checkpoint %d", seq)
            writer.debug("debug line, shown only at --level debug")
            seq += 1
            time.sleep(args.interval)
    except KeyboardInterrupt:
        writer.info("demo stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
