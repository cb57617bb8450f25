from __future__ import annotations

import logging
from copy import deepcopy
from typing import List

from tourism.models.domain import Category, Coordinates, Destination, Difficulty
from tourism.storage.repository import Repository

logger = logging.getLogger(__name__)


SAMPLE_DESTINATIONS: List[Destination] = [
    Destination(
        id="dest_1",
        name="Paris",
        country="France",
        description="The City of Light awaits with its iconic landmarks, world-class museums, and romantic atmosphere.",
        coordinates=Coordinates(lat=48.8566, lng=2.3522),
        category=Category.culture,
        images=["https://images.unsplash.com/photo-1502602898536-47ad22581b52?w=800"],
        price=2500.0,
        rating=4.8,
        activities=["Eiffel Tower", "Louvre Museum", "Seine River Cruise"],
        highlights=["Iconic landmarks", "World-class cuisine", "Rich history"],
        best_season="Spring-Summer",
        duration="5-7 days",
        difficulty=Difficulty.easy,
        is_popular=True,
    ),
    Destination(
        id="dest_2",
        name="Bali",
        country="Indonesia",
        description="Tropical paradise with stunning beaches, ancient temples, and vibrant culture.",
        coordinates=Coordinates(lat=-8.3405, lng=115.0920),
        category=Category.beaches,
        images=["https://images.unsplash.com/photo-1537953773345-d172ccf13cf1?w=800"],
        price=1800.0,
        rating=4.7,
        activities=["Beach relaxation", "Temple visits", "Rice terrace tours"],
        highlights=["Beautiful beaches", "Cultural heritage", "Tropical climate"],
        best_season="Year-round",
        duration="7-10 days",
        difficulty=Difficulty.easy,
        is_popular=True,
    ),
    Destination(
        id="dest_3",
        name="Mount Fuji",
        country="Japan",
        description="Sacred mountain offering breathtaking views and spiritual experiences.",
        coordinates=Coordinates(lat=35.3606, lng=138.7274),
        category=Category.adventure,
        images=["https://images.unsplash.com/photo-1490806843957-31f4c9a91c65?w=800"],
        price=3200.0,
        rating=4.9,
        activities=["Mountain climbing", "Hot springs", "Cultural sites"],
        highlights=["Iconic peak", "Spiritual journey", "Stunning landscapes"],
        best_season="Summer",
        duration="4-6 days",
        difficulty=Difficulty.challenging,
        is_popular=True,
    ),
    Destination(
        id="dest_4",
        name="Maldives",
        country="Maldives",
        description="Ultimate luxury destination with crystal-clear waters and overwater bungalows.",
        coordinates=Coordinates(lat=3.2028, lng=73.2207),
        category=Category.luxury,
        images=["https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800"],
        price=5500.0,
        rating=4.9,
        activities=["Snorkeling", "Spa treatments", "Water sports"],
        highlights=["Luxury resorts", "Marine life", "Perfect beaches"],
        best_season="Year-round",
        duration="5-8 days",
        difficulty=Difficulty.easy,
        is_popular=True,
    ),
]


def seed_destinations(repository: Repository) -> List[Destination]:
    seeded = []
    for destination in SAMPLE_DESTINATIONS:
        if repository.get_destination(destination.id) is None:
            seeded.append(repository.create_destination(deepcopy(destination)))
    logger.info("Seeded %d sample destinations", len(seeded))
    return seeded
