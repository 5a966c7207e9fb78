import argparse
import concurrent.futures
import io
import json
import os

import requests
from PIL import Image

BASE = os.environ.get("CATALOG_BASE", "http://127.0.0.1:8000")


def sample_jpeg(width=1600, height=1200):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (200, 120, 40)).save(buf, format="JPEG")
    return buf.getvalue()


def create_task(i, category_id, image_bytes):
    data = {
        "name": f"Load test {i}",
        "title": f"Load test product {i}",
        "description": "Created by tools/concurrent_create.py",
        "category_id": category_id,
    }
    files = {"image": (f"load-{i}.jpg", image_bytes, "image/jpeg")}
    try:
        r = requests.post(f"{BASE}/api/product/add", data=data, files=files, timeout=30)
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def run_create_concurrent(workers, count, category_id):
    print(f"Creating {count} products with {workers} workers against {BASE}")
    image_bytes = sample_jpeg()
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(create_task, i, category_id, image_bytes) for i in range(count)]
        results = [f.result() for f in futures]
    for r in results:
        print(r[0], r[1])
    ids = [json.loads(r[2])["product"]["id"] for r in results if r[1] == 201]
    print(f"Created {len(ids)}/{count}, unique ids: {len(set(ids))}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent product create requests at a running server.")
    parser.add_argument("--category", required=True, help="existing category id")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--count", type=int, default=16)
    args = parser.parse_args()
    run_create_concurrent(args.workers, args.count, args.category)
