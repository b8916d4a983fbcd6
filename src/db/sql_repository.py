"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            current_fen=game.current_fen,
            moves_uci=list(game.moves_uci),
            mode=game.mode,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Add new info to existing record.
        ----

        The row is locked until the commit (where the database supports it), and the
        version check rejects a write when another session changed the row in between.
        """
        game_db = self._fetch_game(game_id, for_update=True)
        if not game_db:
            return None
        game_db.current_fen = game.current_fen
        # assign a new list: JSON columns do not track in-place mutations
        game_db.moves_uci = list(game.moves_uci)
        game_db.mode = game.mode
        try:
            self.db.commit()
        except StaleDataError as exc:
            self.db.rollback()
            logger.warning("Concurrent update of game %s rejected", game_id)
            raise GameStateError(
                f"Game with {game_id=} was changed by another request. Reload and try again."
            ) from exc
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id, for_update=True)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID, for_update: bool = False) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        if for_update:
            query = query.with_for_update()
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            current_fen=game_db.current_fen,
            moves_uci=list(game_db.moves_uci),
            mode=game_db.mode,
        )
