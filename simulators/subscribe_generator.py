import argparse
import json
import os
import urllib.error
import urllib.request


def post_json(url: str, payload: dict, admin_key: str | None = None):
    data = json.dumps(payload).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if admin_key:
        headers["X-Admin-Key"] = admin_key
    req = urllib.request.Request(url, data=data, headers=headers, method="POST")
    try:
        with urllib.request.urlopen(req, timeout=120) as resp:
            return resp.status, resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        return e.code, e.read().decode("utf-8")


def main():
    p = argparse.ArgumentParser(description="Subscribe an address and optionally trigger a send.")
    p.add_argument("--base-url", default=os.getenv("FROSTWATCH_BASE_URL", "http://localhost:8000"))
    p.add_argument("--admin-key", default=os.getenv("ADMIN_API_KEY"))
    p.add_argument("--email", default="gardener@example.com")
    p.add_argument("--zip", dest="zip_code", default="60601")
    p.add_argument("--send-now", action="store_true", help="fire /api/send-alerts-now afterwards")
    args = p.parse_args()

    status, body = post_json(f"{args.base_url}/api/subscribe", {"email": args.email, "zipCode": args.zip_code})
    print("subscribe", status, body)

    if args.send_now:
        status, body = post_json(f"{args.base_url}/api/send-alerts-now", {}, args.admin_key)
        print("send-alerts-now", status, body)


if __name__ == "__main__":
    main()
