"""Service layer for Dominion.

Services sit between the in-memory domain and the outer surfaces (HTTP API,
command line).  They hold the running game and its collaborators:

- GameService: game lifecycle, turn commands, purchases, queries, saves

Production Usage:
    from dominion.factory import create_game_service
    service = create_game_service(settings)
    service.new_game("known_world", "kingdom_north")

Testing Usage:
    from dominion.services.game_service import GameService

    service = GameService(FakeWorldSource(), JsonSessionRepository(tmp_path))
"""

from dominion.services.game_service import GameService

__all__ = ["GameService"]
