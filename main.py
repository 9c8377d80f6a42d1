# -*- coding: utf-8 -*-
"""
main.py

Console entry point of the incident reporting chat demo.

🎯 What it does
--------------------------------------
- reads messages from the keyboard, one turn at a time
- runs them through brain.process_message with a single session id
- prints the reply, the workflow state and the metadata the frontend
  would receive

Commands
- "/image <url>" : attach an image reference to the next message
- "/state"       : print the stored conversation context
- "/reset"       : forget the session and start over
- "exit"/"quit"  : leave

👉 The real frontend talks to app_fastapi.py (POST /api/chat) instead.
"""

import json
import uuid
from typing import Any, Dict, Optional

from brain import get_engine


def print_result(result: Dict[str, Any]) -> None:
    print("\n[state]", result.get("workflowState"), "/", result.get("incidentType") or "-")
    print(result.get("message", ""))

    if result.get("resources"):
        print("[resources]")
        for resource in result["resources"]:
            print(" -", resource)
    if result.get("suggestedActions"):
        print("[actions]", " | ".join(result["suggestedActions"]))
    if result.get("metadata"):
        print("[metadata]", json.dumps(result["metadata"], ensure_ascii=False))


def run_text_mode() -> None:
    print("\n[Incident chat] type your message (exit to quit)")
    engine = get_engine()
    session_id = str(uuid.uuid4())
    pending_image: Optional[str] = None

    while True:
        try:
            text = input("\nyou > ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye.")
            break

        if text.lower() in ("exit", "quit"):
            print("Bye.")
            break
        if not text:
            continue

        if text.startswith("/image "):
            pending_image = text[len("/image "):].strip() or None
            print("(image attached to the next message)")
            continue
        if text == "/state":
            ctx = engine.store.get(session_id)
            print(json.dumps(ctx.debug_view() if ctx else {}, ensure_ascii=False, indent=2))
            continue
        if text == "/reset":
            engine.clear_session(session_id)
            session_id = str(uuid.uuid4())
            print(f"(new session {session_id})")
            continue

        result = engine.process_message(session_id, text, pending_image)
        pending_image = None
        print_result(result)


def main():
    print("===== Incident reporting chat demo =====")
    run_text_mode()


if __name__ == "__main__":
    main()
