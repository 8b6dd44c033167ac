from __future__ import annotations

import requests

from sermo import SermoError, load_profile
from sermo.utils.logger import setup_logger


def main():
    setup_logger(level="DEBUG")
    profile = load_profile()
    print(f"Chatbot ready ({profile.provider.display_name}, {profile.model_name or 'default model'}).")
    print("Type /quit to exit. Prefix a path with /json to dump a response field:")
    print("  /json choices[0].finish_reason Hello there")

    while True:
        user_input = input("you> ").strip()
        if user_input.lower() in {"/quit", "quit", "exit"}:
            break
        if not user_input:
            continue

        path = None
        message = user_input
        if user_input == "/json" or user_input.startswith("/json "):
            parts = user_input.split(maxsplit=2)
            if len(parts) < 3:
                print("usage: /json <path> <message>")
                continue
            _, path, message = parts

        try:
            if path is not None:
                response = profile.send_single_json(message, path, timeout=120)
            else:
                response = profile.send_single(message, timeout=120)
        except (SermoError, requests.RequestException) as exc:
            response = f"Error: {exc}"
        print("bot>", response)


if __name__ == "__main__":
    main()
