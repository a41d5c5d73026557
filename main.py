# main.py

import logging
from typing import Any, List

from dotenv import load_dotenv

# Charge les variables d'environnement (.env) avant core.config
load_dotenv()

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from core import config
from core.budget import summarize
from core.errors import GenerationFailed, ValidationFailure
from core.models import Itinerary, TripPreferences
from core.normalizer import normalize_itinerary
from core.pipeline import generate_itinerary
from core.session import PlannerSession
from services import currency as cur
from services.rates import RateCache
from services.storage import export_plan

logging.basicConfig(level=config.LOG_LEVEL)
log = logging.getLogger(__name__)

app = FastAPI(title="AI Itinerary Planner")
rates = RateCache()


# Schéma pour la requête d'itinéraire
class ItineraryRequest(BaseModel):
    duration: int = Field(gt=0)
    interests: List[str] = Field(default_factory=list)
    budget: float = Field(ge=0)
    group_size: int = Field(default=2, gt=0)
    start_location: str = ""
    custom_stops: List[str] = Field(default_factory=list)
    currency: str = config.BASE_CURRENCY


def _priced(itin: Itinerary, budget: float, code: str) -> dict:
    summary = summarize(itin, budget)
    return {
        "days": itin.to_list(),
        "tripTotal": summary.trip_total,
        "remaining": summary.remaining,
        "percentUsed": summary.percent_used,
        "currency": code,
        "display": {
            "tripTotal": cur.display(summary.trip_total, code, rates),
            "remaining": cur.display(summary.remaining, code, rates),
            "days": {str(d.day): cur.display(d.day_total, code, rates) for d in itin.days},
        },
    }


@app.post("/api/itinerary", response_model=dict)
def generate_itinerary_endpoint(req: ItineraryRequest):
    code = req.currency.upper()
    rates.refresh()
    if code not in rates.codes:
        raise HTTPException(status_code=422, detail=f"Unsupported currency: {code}")

    session = PlannerSession(
        TripPreferences(
            duration=req.duration,
            interests=set(req.interests),
            budget=req.budget,
            group_size=req.group_size,
            start_location=req.start_location,
            custom_stops=req.custom_stops,
        )
    )
    try:
        generate_itinerary(session)
    except GenerationFailed as e:
        raise HTTPException(status_code=502, detail=e.user_message)
    return _priced(session.itinerary, req.budget, code)


@app.get("/api/rates")
def rates_endpoint():
    outcome = rates.refresh()
    return {"base": config.BASE_CURRENCY, "source": outcome.source, "rates": rates.table()}


@app.post("/api/export")
def export_endpoint(days: List[Any] = Body(...)):
    try:
        itin = normalize_itinerary(days)
    except ValidationFailure as e:
        raise HTTPException(status_code=422, detail=str(e))
    return Response(
        content=export_plan(itin),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{config.EXPORT_FILE_NAME}"'},
    )
