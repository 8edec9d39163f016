"""Seed a running Reggie with one message sample per registered type.

Run: python scripts/seed_samples.py [--base http://127.0.0.1:8000]
"""
import argparse

import httpx

BASE = "http://127.0.0.1:8000"

SAMPLES = [
    {
        "messageId": "order-created-basic",
        "className": "OrderCreated",
        "topic": "orders-topic",
        "attributes": {"source": "seed"},
        "message": {"orderId": "123", "customerId": "456", "amount": 99.99},
    },
]


def run(base: str):
    with httpx.Client(base_url=base) as client:
        types = client.get("/message-types").json().get("types", {})
        for sample in SAMPLES:
            if sample["className"] not in types:
                print(f"skip {sample['messageId']}: {sample['className']} not registered")
                continue
            r = client.put("/message-samples", json=sample)
            print(sample["messageId"], r.status_code)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--base", default=BASE)
    run(parser.parse_args().base)
