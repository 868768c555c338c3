import argparse
import concurrent.futures
import os

import requests

BASE = os.environ.get("STOREFRONT_BASE", "http://127.0.0.1:8000")


def sale_task(i, product_id, variant_name):
    """Open a draft with one unit of the product and submit it."""
    try:
        r = requests.post(f"{BASE}/api/admin/orders", timeout=10)
        draft_id = r.json()["draft_id"]
        r = requests.post(
            f"{BASE}/api/admin/orders/{draft_id}/products",
            json={"product_id": product_id, "variant_name": variant_name},
            timeout=10,
        )
        if r.status_code != 200:
            return (i, "add", r.status_code, r.text)
        r = requests.post(f"{BASE}/api/admin/orders/{draft_id}/submit", timeout=20)
        return (i, "submit", r.status_code, r.text[:120])
    except requests.RequestException as e:
        return (i, "submit", "ERR", str(e))


def run(workers, product_id, variant_name):
    before = requests.get(f"{BASE}/api/products/{product_id}", timeout=10).json()
    print(f"Running {workers} concurrent sales of product {product_id} (stock={before.get('stock')})")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(sale_task, i, product_id, variant_name) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    ok = sum(1 for r in results if r[1] == "submit" and r[2] == 200)
    after = requests.get(f"{BASE}/api/products/{product_id}", timeout=10).json()
    print(f"Successful sales: {ok}; stock after: {after.get('stock')}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent admin sales at one product.")
    parser.add_argument("--product-id", type=int, required=True)
    parser.add_argument("--variant", default=None)
    parser.add_argument("--workers", type=int, default=10)
    args = parser.parse_args()
    run(args.workers, args.product_id, args.variant)
