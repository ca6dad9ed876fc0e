"""
my_view.py — YOUR PRESENTATION LAYER
====================================

This is the only file you need to edit to change how the game looks.

Implement render() and notify(). celebrate() is optional.

render() receives:
- snapshot: the full session state (phase, code, players, current_player,
  active_question, time_left, outcome)
- can_answer: whether you may answer right now
- is_host: whether you may start the game

The package handles everything else: the connection, reconnection,
the countdown, turn checks and winner computation.
"""

from trivia_client import Phase, SessionView


class MyView(SessionView):

    def render(self, snapshot, can_answer, is_host):
        # ─── YOUR DRAWING CODE HERE ───
        if snapshot.phase == Phase.PLAYING and snapshot.active_question:
            marker = ">>" if can_answer else "  "
            print(f"{marker} [{snapshot.time_left:2}s] {snapshot.active_question.text}")
        else:
            print(f"[{snapshot.phase.value}] code={snapshot.code or '-'} "
                  f"players={[p.name for p in snapshot.players]}")

    def notify(self, message):
        print(f"(server) {message}")

    def celebrate(self, winner):
        print(f"{winner.name} wins with {winner.score} points!")
