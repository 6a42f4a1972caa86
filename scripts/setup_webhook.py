"""Register the Telegram webhook via the Bot API.

Usage: python scripts/setup_webhook.py https://relay.example.com

Requires TELEGRAM_BOT_TOKEN in .env (issued by @BotFather).
"""

import os
import sys

import httpx
from dotenv import load_dotenv

load_dotenv()

TELEGRAM_API_URL = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
WEBHOOK_SECRET = os.getenv("TELEGRAM_WEBHOOK_SECRET", "")

if not BOT_TOKEN:
    print("Error: TELEGRAM_BOT_TOKEN not set in .env")
    print("1. Talk to @BotFather in Telegram and create a bot")
    print("2. Add to .env: TELEGRAM_BOT_TOKEN=your_token")
    sys.exit(1)

if len(sys.argv) != 2:
    print("Usage: python scripts/setup_webhook.py <public base URL>")
    sys.exit(1)

webhook_url = f"{sys.argv[1].rstrip('/')}/api/webhook/telegram"

payload = {
    "url": webhook_url,
    "max_connections": 100,
    "allowed_updates": ["message"],
}
if WEBHOOK_SECRET:
    payload["secret_token"] = WEBHOOK_SECRET

print(f"Setting webhook to {webhook_url}...")
resp = httpx.post(
    f"{TELEGRAM_API_URL}/bot{BOT_TOKEN}/setWebhook",
    json=payload,
    timeout=10.0,
)

data = resp.json()
if resp.status_code == 200 and data.get("ok"):
    print("Webhook configured successfully!")
    print(f"  URL: {webhook_url}")
    print(f"  Status: {data.get('description')}")
    print()
    print("Next step: send /start to the bot in Telegram.")
else:
    print(f"Error: {resp.status_code}")
    print(data.get("description", resp.text))
    sys.exit(1)
