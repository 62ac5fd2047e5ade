"""Interactive CLI simulator — exercise generate / validate over HTTP."""

import asyncio

import httpx
import uvicorn

from otp_service.main import create_app
from otp_service.stores.memory_store import InMemoryOTPStore

BLUE = "\033[94m"
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"

BASE_URL = "http://127.0.0.1:8000"


async def main() -> None:
    print(f"\n{BOLD}{'=' * 52}")
    print(f"  🔐  OTP Service — Simulator")
    print(f"{'=' * 52}{RESET}\n")

    print(f"{DIM}Commands: gen <user>   check <user> <otp>   quit{RESET}\n")

    # ── Start the app in the background on an in-memory store ─
    app = create_app(store=InMemoryOTPStore())
    config = uvicorn.Config(app, host="127.0.0.1", port=8000, log_level="warning")
    server = uvicorn.Server(config)
    server_task = asyncio.create_task(server.serve())

    # Give the server a moment to start
    await asyncio.sleep(0.5)

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        while True:
            try:
                line = input(f"{BLUE}{BOLD}>{RESET} ").strip()
            except (KeyboardInterrupt, EOFError):
                print(f"\n{DIM}Goodbye!{RESET}")
                break

            if not line:
                continue
            parts = line.split()
            cmd = parts[0].lower()

            if cmd == "quit":
                print(f"{DIM}Goodbye!{RESET}")
                break

            if cmd == "gen" and len(parts) == 2:
                resp = await client.post("/generate", json={"userId": parts[1]})
            elif cmd == "check" and len(parts) == 3:
                resp = await client.post(
                    "/validate", json={"userId": parts[1], "otp": parts[2]}
                )
            else:
                print(f"{YELLOW}Usage: gen <user> | check <user> <otp> | quit{RESET}\n")
                continue

            colour = GREEN if resp.status_code == 200 else RED
            print(f"{colour}{resp.status_code}{RESET} {resp.text}\n")

    # Shut down the background server
    server.should_exit = True
    await server_task


if __name__ == "__main__":
    asyncio.run(main())
