"""
Aggregations over stored trips: per user, and across the community for impact ranking.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List
import logging

import pandas as pd
from sqlalchemy.orm import Session

from ecotrack.models.travel import Trip
from ecotrack.models.vehicle import Vehicle

logger = logging.getLogger(__name__)

TRIP_COLUMNS = ["id", "vehicleId", "mode", "distanceKm", "emissionKg", "date"]


def _load_trips_frame(db: Session, user_id: str) -> pd.DataFrame:
    rows = db.query(
        Trip.id, Trip.vehicleId, Trip.mode, Trip.distanceKm, Trip.emissionKg, Trip.date
    ).filter(Trip.userId == user_id).all()
    return pd.DataFrame([tuple(row) for row in rows], columns=TRIP_COLUMNS)


def get_summary(db: Session, user_id: str) -> Dict[str, Any]:
    df = _load_trips_frame(db, user_id)
    if df.empty:
        return {"totalDistance": 0.0, "totalEmission": 0.0, "totalTrips": 0, "avgEmission": 0.0}

    return {
        "totalDistance": round(float(df["distanceKm"].sum()), 2),
        "totalEmission": round(float(df["emissionKg"].sum()), 2),
        "totalTrips": int(len(df)),
        "avgEmission": round(float(df["emissionKg"].mean()), 2),
    }


def get_mode_breakdown(db: Session, user_id: str) -> List[Dict[str, Any]]:
    """Total emission and trip count per mode, highest emission first."""
    df = _load_trips_frame(db, user_id)
    if df.empty:
        return []

    grouped = df.groupby("mode").agg(
        totalEmission=("emissionKg", "sum"),
        trips=("id", "count"),
    ).reset_index()
    grouped = grouped.sort_values(["totalEmission", "mode"], ascending=[False, True])
    return [
        {"mode": row.mode, "totalEmission": round(float(row.totalEmission), 2), "count": int(row.trips)}
        for row in grouped.itertuples(index=False)
    ]


def get_emission_trend(db: Session, user_id: str, days: int = 30) -> List[Dict[str, Any]]:
    """Daily emission and distance over the last ``days`` days, oldest day first."""
    df = _load_trips_frame(db, user_id)
    if df.empty:
        return []

    date_limit = datetime.utcnow() - timedelta(days=days)
    df = df[pd.to_datetime(df["date"]) >= date_limit].copy()
    if df.empty:
        return []

    df["day"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m-%d")
    grouped = df.groupby("day").agg(
        totalEmission=("emissionKg", "sum"),
        distance=("distanceKm", "sum"),
    ).reset_index().sort_values("day")
    return [
        {"day": row.day, "totalEmission": round(float(row.totalEmission), 2), "distance": round(float(row.distance), 2)}
        for row in grouped.itertuples(index=False)
    ]


def get_vehicle_usage(db: Session, user_id: str) -> List[Dict[str, Any]]:
    """Trips, distance and emission per vehicle; deleted vehicles stay listed as unknown."""
    df = _load_trips_frame(db, user_id)
    df = df[df["vehicleId"].notna()]
    if df.empty:
        return []

    grouped = df.groupby("vehicleId").agg(
        trips=("id", "count"),
        distance=("distanceKm", "sum"),
        emission=("emissionKg", "sum"),
    ).reset_index()

    vehicle_ids = [int(v) for v in grouped["vehicleId"]]
    vehicles = {
        v.id: v for v in db.query(Vehicle).filter(Vehicle.id.in_(vehicle_ids)).all()
    }

    usage = []
    for row in grouped.itertuples(index=False):
        vehicle = vehicles.get(int(row.vehicleId))
        usage.append({
            "vehicleId": int(row.vehicleId),
            "vehicleName": vehicle.vehicleName if vehicle else "Unknown Vehicle",
            "vehicleModel": vehicle.vehicleModel if vehicle else "N/A",
            "trips": int(row.trips),
            "distance": round(float(row.distance), 2),
            "emission": round(float(row.emission), 2),
        })
    return usage


# Average car, kg CO2 per km; savings are measured against driving everything
BASELINE_KG_PER_KM = 0.15

# (minimum percentile, tier, message), best tier first
IMPACT_TIERS = [
    (90, "Eco Champion", "You're a sustainability leader! Amazing work."),
    (75, "Green Contributor", "You're doing great! Keep choosing green modes."),
    (50, "Conscious Traveler", "You're above average! Can you reach the next tier?"),
]
STARTER_TIER = "Sustainability Starter"
STARTER_MESSAGE = "Every eco-friendly trip helps!"
SAVER_MESSAGE = "Off to a good start! Try replacing one car trip this week."
NO_TRIPS_MESSAGE = "Start logging trips to see your impact!"


def get_community_impact(db: Session, user_id: str) -> Dict[str, Any]:
    """
    CO2 saved by a user compared with the community.

    Each user's saving is ``distance * BASELINE_KG_PER_KM - emission`` over all
    their trips. Users are ranked by saving, highest first; tied users share
    the best rank of their group. The percentile is the share of users ranked
    at or below the user, so the top user is at 100.
    """
    rows = db.query(Trip.userId, Trip.distanceKm, Trip.emissionKg).all()
    df = pd.DataFrame([tuple(row) for row in rows], columns=["userId", "distanceKm", "emissionKg"])

    if df.empty or user_id not in set(df["userId"]):
        return {"savedKg": 0.0, "percentile": 0, "tier": STARTER_TIER, "message": NO_TRIPS_MESSAGE}

    per_user = df.groupby("userId").agg(
        distance=("distanceKm", "sum"),
        emission=("emissionKg", "sum"),
    )
    per_user["savedKg"] = per_user["distance"] * BASELINE_KG_PER_KM - per_user["emission"]
    per_user["rank"] = per_user["savedKg"].rank(method="min", ascending=False)

    total_users = len(per_user)
    saved_kg = float(per_user.at[user_id, "savedKg"])
    rank_index = int(per_user.at[user_id, "rank"]) - 1
    # Half-up rounding
    percentile = int((total_users - rank_index) * 100 / total_users + 0.5)

    tier, message = STARTER_TIER, STARTER_MESSAGE
    for minimum, tier_name, tier_message in IMPACT_TIERS:
        if percentile >= minimum:
            tier, message = tier_name, tier_message
            break
    else:
        if saved_kg > 0:
            message = SAVER_MESSAGE

    logger.debug(f"Community impact for {user_id}: rank {rank_index + 1}/{total_users}")
    return {
        "savedKg": max(0.0, round(saved_kg, 2)),
        "percentile": percentile,
        "tier": tier,
        "message": message,
    }
