from fastapi import APIRouter

from app.api.routes import core, games, grades, performances, players, recruit_reports, recruits, stats

api_router = APIRouter()
api_router.include_router(core.router)
api_router.include_router(performances.router)
api_router.include_router(recruit_reports.router)
api_router.include_router(recruits.router)
api_router.include_router(players.router)
api_router.include_router(games.router)
api_router.include_router(stats.router)
api_router.include_router(grades.router)
