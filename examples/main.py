"""
main.py — Play with your own view
=================================

Point the client at a coordinator, plug in your view, and create a game.

    python main.py

The client will:
  1. Connect to the coordinator
  2. Ask it for a new game as "Dana"
  3. Call YOUR view on every state change
  4. Start the game once a second player has joined

Press Ctrl+C to stop.
"""

import asyncio
import logging

from trivia_client import Phase, TriviaClient
from my_view import MyView

# ── Setup logging (so you can see what's happening) ──
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)

# ── Configuration ──
config = {
    # Session coordinator
    "server_url": "http://localhost:3001",

    # Give up after this many retries when the connection drops
    "reconnection_attempts": 5,

    # Seconds per question before the coordinator's first update arrives
    "initial_time_left": 10,
}


async def play():
    async with TriviaClient(config, MyView()) as client:
        await client.create_game("Dana")
        answered = None
        while client.snapshot.phase != Phase.FINISHED:
            snap = client.snapshot
            if snap.phase == Phase.WAITING and len(snap.players) >= 2:
                await client.start_game()
            if client.dispatcher.can_answer() and snap.active_question != answered:
                # Always pick the first option
                await client.answer(0)
                answered = snap.active_question
            await asyncio.sleep(0.5)


# ── Create your view and run ──
asyncio.run(play())
