"""Client harness: fetch a user's scenario from a running Reggie and replay it.

Run: python scripts/client_harness.py --user alice --scenario checkout-flow
"""
import argparse
import sys

import httpx

from reggie.playback import COLUMN_DELAY_SEC, play_scenario
from reggie.schemas import Scenario

BASE = "http://127.0.0.1:8000"


def run(base: str, user_id: str, scenario_id: str, start_column: int = 1, column_delay: float = COLUMN_DELAY_SEC) -> int:
    with httpx.Client(base_url=base, timeout=30.0) as client:
        r = client.get(f"/users/{user_id}/scenarios/{scenario_id}")
        if r.status_code != 200:
            print(f"could not load scenario: {r.status_code} {r.text}")
            return 1
        scenario = Scenario.model_validate(r.json())
        print(f"playing '{scenario.name}' ({len(scenario.messages)} messages)")
        result = play_scenario(client, scenario, start_column=start_column, column_delay=column_delay)

    for message_id, res in result.results.items():
        detail = res.response_body.get("messageId") if isinstance(res.response_body, dict) else res.error_body
        print(f"  {message_id}: {res.status} {detail}")
    print(f"status={result.status} completed_columns={result.completed_columns}")
    for err in result.errors:
        print(f"  error: {err}")
    return 0 if result.status == "completed" else 2


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--base", default=BASE)
    parser.add_argument("--user", required=True)
    parser.add_argument("--scenario", required=True)
    parser.add_argument("--start-column", type=int, default=1)
    parser.add_argument("--column-delay", type=float, default=COLUMN_DELAY_SEC, help="seconds to wait after each column")
    args = parser.parse_args()
    sys.exit(run(args.base, args.user, args.scenario, args.start_column, args.column_delay))
