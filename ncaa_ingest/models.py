from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .db import Base


class Conference(Base):
    __tablename__ = "conferences"
    __table_args__ = (
        UniqueConstraint("name", "sport", "division", "gender", name="uq_conferences_natural_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    conference_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    sport = Column(String, nullable=False)
    division = Column(String, nullable=False)
    gender = Column(String, nullable=False)
    level = Column(String, nullable=False, default="college")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class Team(Base):
    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("name", "sport", "division", "gender", name="uq_teams_natural_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    sport = Column(String, nullable=False)
    division = Column(String, nullable=False)
    gender = Column(String, nullable=False)
    level = Column(String, nullable=False, default="college")
    conference = Column(String, nullable=True)   # conference name, not a FK
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        UniqueConstraint("game_id", name="uq_games_game_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    game_id = Column(String, nullable=False)
    data_source = Column(String, nullable=False, default="ncaa_official")
    date = Column(Date, nullable=False)
    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    sport = Column(String, nullable=False)
    division = Column(String, nullable=False)
    gender = Column(String, nullable=False)
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    status = Column(String, nullable=False, default="scheduled")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    home_team = relationship("Team", foreign_keys=[home_team_id])
    away_team = relationship("Team", foreign_keys=[away_team_id])
