"""
FastAPI endpoints for the team app
- /api/booking proxies the LCSD pitch session feed
- /calendar/matches.ics serves the team's matches as an iCal feed
"""
import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from supabase import Client, create_client

from utils.booking import BookingError, fetch_bookings
from utils.calendar_feed import build_matches_calendar
from utils.config import ConfigError, configure_logging, get_service_credentials
from utils.db import list_matches

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Football Team API")


def get_service_client() -> Client:
    """Service-role client; the calendar feed has no signed-in user"""
    try:
        url, key = get_service_credentials()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        raise HTTPException(status_code=500, detail="Server is missing Supabase credentials")
    return create_client(url, key)


@app.get("/")
async def root():
    return {"message": "Football Team API", "version": "1.0.0"}


@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.get("/api/booking")
def get_booking():
    """Return the pitch session list unchanged"""
    try:
        return fetch_bookings()
    except BookingError as e:
        logger.error(f"Error fetching booking data: {e}")
        return JSONResponse(status_code=500, content={"message": "An error occurred while fetching data."})


@app.get("/calendar/matches.ics")
def get_matches_calendar(client: Client = Depends(get_service_client)):
    """
    iCal feed with all team matches
    Subscribe via: https://your-host/calendar/matches.ics
    """
    try:
        matches = list_matches(client)
    except Exception as e:
        logger.error(f"Error loading matches for calendar: {e}")
        raise HTTPException(status_code=500, detail="Failed to load matches")

    return Response(
        content=build_matches_calendar(matches),
        media_type="text/calendar",
        headers={"Content-Disposition": "inline; filename=matches.ics"},
    )
