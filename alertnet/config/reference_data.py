"""
Static reference data for HaitiAlertNet.

Region lookup table, per-type default imagery, map defaults, and the seed
collections loaded into the domain store at startup. Seed timestamps are
computed relative to the `now` passed in, so a freshly started service
always shows recent activity.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from alertnet.models.base import NewsArticle
from alertnet.models.geo import Coordinate, CircleArea
from alertnet.models.report import DisasterType, Report, ReportStatus
from alertnet.models.resource import AvailabilityStatus, Resource, ResourceCategory
from alertnet.models.zone import HazardZone, Severity


HAITI_CENTER = Coordinate(lat=18.9712, lng=-72.2852)
HAITI_INITIAL_ZOOM = 8

# Region label -> reference coordinate. Labels are the stable values the
# submission form stores in `location_text`.
HAITI_REGIONS: Dict[str, Coordinate] = {
    # Departments
    "Artibonite": Coordinate(lat=19.4500, lng=-72.6833),
    "Centre": Coordinate(lat=19.1500, lng=-72.0167),
    "Grand'Anse": Coordinate(lat=18.6500, lng=-74.1167),
    "Nippes": Coordinate(lat=18.4425, lng=-73.0872),
    "Nord": Coordinate(lat=19.7528, lng=-72.1944),
    "Nord-Est": Coordinate(lat=19.6667, lng=-71.8333),
    "Nord-Ouest": Coordinate(lat=19.9333, lng=-72.8333),
    "Ouest": Coordinate(lat=18.5944, lng=-72.3074),
    "Sud": Coordinate(lat=18.2000, lng=-73.7500),
    "Sud-Est": Coordinate(lat=18.2345, lng=-72.5347),
    # Specific locations
    "Léogâne": Coordinate(lat=18.5104, lng=-72.6337),
    "Petit Paradis": Coordinate(lat=18.5030, lng=-72.6070),
    "Gressier": Coordinate(lat=18.5500, lng=-72.5167),
    "Chardonnières": Coordinate(lat=18.2736, lng=-74.1500),
    "Petit Trou de Nippes": Coordinate(lat=18.5083, lng=-73.5083),
    "Corail": Coordinate(lat=18.5667, lng=-73.8833),
    "Môle Saint-Nicolas": Coordinate(lat=19.8000, lng=-73.3667),
    "Anse-à-Veau": Coordinate(lat=18.5000, lng=-73.3500),
    "Jérémie": Coordinate(lat=18.6500, lng=-74.1167),
    "Cité Soleil": Coordinate(lat=18.5780, lng=-72.3377),
    "Morne-à-Chandelle": Coordinate(lat=18.2345, lng=-72.5347),
    "Petit-Goâve": Coordinate(lat=18.4333, lng=-72.8667),
    "Port-de-Paix": Coordinate(lat=19.9333, lng=-72.8333),
    "Cap-Haïtien": Coordinate(lat=19.7528, lng=-72.1944),
    "Les Abricots": Coordinate(lat=18.6333, lng=-74.3167),
    "Saint-Louis-du-Sud": Coordinate(lat=18.2667, lng=-73.5500),
    "Baradères": Coordinate(lat=18.4833, lng=-73.6333),
    "Cavaillon": Coordinate(lat=18.3000, lng=-73.6667),
    "Fonds-des-Nègres": Coordinate(lat=18.4167, lng=-73.3000),
    "Tiburon": Coordinate(lat=18.3167, lng=-74.3833),
}

DISASTER_TYPE_IMAGE_URLS: Dict[DisasterType, str] = {
    DisasterType.FLOOD: "https://images.pexels.com/photos/753619/pexels-photo-753619.jpeg",
    DisasterType.EARTHQUAKE: "https://cdn.britannica.com/34/127134-050-49EC55CD/Building-foundation-earthquake-Japan-Kobe-January-1995.jpg",
    DisasterType.FIRE: "https://www.hdwallpapers.in/download/fire_red_orange_dark_4k_5k_hd_fire-3840x2160.jpg",
    DisasterType.HURRICANE: "https://www.shutterstock.com/shutterstock/videos/3539883861/thumb/1.jpg?ip=x480",
    DisasterType.STORM: "https://i.pinimg.com/736x/cd/19/cd/cd19cd3e1fec0a0d3290812942ab2d27.jpg",
    DisasterType.LANDSLIDE: "https://t3.ftcdn.net/jpg/01/38/22/68/360_F_138226873_ciwW3PX7AAVs8yGmmzDxAXHk9ryW8bBb.jpg",
    DisasterType.OTHER: "https://mountainhouse.com/cdn/shop/articles/key-west-storm-featured-image_1024x.jpg?v=1687570146",
}


def resolve_region(label: Optional[str]) -> Optional[Coordinate]:
    """Exact lookup of a region label; None when unknown or empty."""
    if not label:
        return None
    return HAITI_REGIONS.get(label)


def default_image_for(disaster_type: DisasterType) -> str:
    return DISASTER_TYPE_IMAGE_URLS[disaster_type]


def seed_reports(now: datetime) -> List[Report]:
    return [
        Report(
            id="HTreport1",
            type=DisasterType.FLOOD,
            description="Flooding in Cité Soleil after heavy rains. Roads are blocked.",
            location=Coordinate(lat=18.5780, lng=-72.3377),
            location_text="Cité Soleil",
            photo_url=default_image_for(DisasterType.FLOOD),
            timestamp=now - timedelta(hours=3),
            status=ReportStatus.VERIFIED,
            submitter="Jean P.",
        ),
        Report(
            id="HTreport2",
            type=DisasterType.EARTHQUAKE,
            description="Minor tremors felt in Jacmel. Some cracks in older buildings.",
            location=Coordinate(lat=18.2345, lng=-72.5347),
            location_text="Sud-Est",
            photo_url=default_image_for(DisasterType.EARTHQUAKE),
            timestamp=now - timedelta(hours=1),
            status=ReportStatus.UNDER_REVIEW,
        ),
        Report(
            id="HTreport3",
            type=DisasterType.STORM,
            description="Strong winds and rain in Cap-Haïtien. Power outages reported.",
            location=Coordinate(lat=19.7528, lng=-72.1944),
            location_text="Cap-Haïtien",
            photo_url=default_image_for(DisasterType.STORM),
            timestamp=now - timedelta(hours=6),
            status=ReportStatus.NEW,
        ),
    ]


def seed_resources(now: datetime) -> List[Resource]:
    return [
        Resource(
            id="HThospital1",
            name="City General Hospital (HUEH)",
            category=ResourceCategory.MEDICAL,
            location=Coordinate(lat=18.5393, lng=-72.3365),
            address="123 Healthcare Avenue, Central District, Port-au-Prince",
            contact="+509-11-2567-8900",
            operating_hours="24/7",
            icon="fa-solid fa-hospital",
            description="Multi-specialty hospital with full emergency services and trauma center. "
                        "Recently renovated wing for critical care.",
            availability_status=AvailabilityStatus.AVAILABLE,
            current_capacity=85,
            max_capacity=200,
            services=["Emergency", "ICU", "Surgery", "Ambulance", "Pediatrics"],
            distance_km=1.2,
            last_update_time=now - timedelta(minutes=5),
        ),
        Resource(
            id="HTclinic1",
            name="Community Health Clinic",
            category=ResourceCategory.MEDICAL,
            location=Coordinate(lat=18.5517, lng=-72.3029),
            address="654 Health Street, South District, Delmas",
            contact="+509-11-2567-8904",
            operating_hours="9:00 AM - 5:00 PM",
            icon="fa-solid fa-clinic-medical",
            description="Primary healthcare facility providing basic medical services, vaccinations, and maternal care.",
            availability_status=AvailabilityStatus.FULL,
            current_capacity=50,
            max_capacity=50,
            services=["Basic Treatment", "First Aid", "Medication", "Vaccination"],
            distance_km=3.2,
            last_update_time=now - timedelta(minutes=18),
        ),
        Resource(
            id="HTfoodcenter1",
            name="Hope Food Pantry - Delmas",
            category=ResourceCategory.FOOD,
            location=Coordinate(lat=18.5480, lng=-72.3005),
            address="789 Charity Road, Delmas 33, Port-au-Prince",
            contact="+509-22-3333-4444",
            operating_hours="10 AM - 2 PM (Mon-Fri)",
            icon="fa-solid fa-utensils",
            description="Provides essential food rations including rice, beans, and cooking oil to families in need.",
            availability_status=AvailabilityStatus.AVAILABLE,
            current_capacity=150,  # families served today
            max_capacity=200,
            services=["Dry Rations", "Nutrition Advice"],
            distance_km=2.5,
            last_update_time=now - timedelta(hours=2),
        ),
        Resource(
            id="HTshelter1",
            name="Safe Haven Community Shelter",
            category=ResourceCategory.SHELTER,
            location=Coordinate(lat=18.5338, lng=-72.4096),
            address="456 Safe Route, Carrefour, near Mariani",
            contact="+509-44-5555-6666",
            operating_hours="24/7",
            icon="fa-solid fa-house-chimney-user",
            description="Temporary shelter providing cots, blankets, and basic hygiene kits for displaced individuals.",
            availability_status=AvailabilityStatus.LIMITED,
            current_capacity=80,
            max_capacity=100,
            services=["Beds", "Meals", "First Aid Post"],
            distance_km=5.1,
            last_update_time=now - timedelta(minutes=30),
        ),
        Resource(
            id="HTwater1",
            name="AquaPure Water Station - Léogâne",
            category=ResourceCategory.WATER,
            location=Coordinate(lat=18.5104, lng=-72.6337),
            address="Near central market, Léogâne",
            contact="Local committee: +509-55-7777-8888",
            operating_hours="8 AM - 6 PM",
            icon="fa-solid fa-water",
            description="Community access point for purified drinking water. Bring your own containers.",
            availability_status=AvailabilityStatus.AVAILABLE,
            current_capacity=5000,  # liters available
            max_capacity=10000,
            services=["Potable Water", "Container Refill"],
            distance_km=10.3,
            last_update_time=now - timedelta(hours=1),
        ),
        Resource(
            id="HTemergency1",
            name="Rapid Response Paramedics",
            category=ResourceCategory.EMERGENCY_SERVICES,
            location=Coordinate(lat=18.56, lng=-72.32),
            address="Serves Port-au-Prince Metropolitan Area",
            contact="Emergency Hotline: 118",
            operating_hours="24/7",
            icon="fa-solid fa-truck-medical",
            description="Mobile emergency medical services. Dispatch available for critical situations.",
            availability_status=AvailabilityStatus.AVAILABLE,
            current_capacity=3,  # available units
            max_capacity=5,
            services=["Ambulance Transport", "On-site Triage", "Emergency Medical Care"],
            distance_km=None,
            last_update_time=now - timedelta(minutes=2),
        ),
    ]


def seed_zones(now: datetime) -> List[HazardZone]:
    fault_line = [
        (18.40, -73.00), (18.42, -72.90), (18.45, -72.80), (18.48, -72.70),
        (18.50, -72.60), (18.51, -72.50), (18.505, -72.50), (18.495, -72.60),
        (18.475, -72.70), (18.445, -72.80), (18.415, -72.90), (18.395, -73.00),
    ]
    return [
        HazardZone(
            id="HTzone1",
            name="Artibonite Flood Plain",
            type=DisasterType.FLOOD,
            area=[
                Coordinate(lat=19.20, lng=-72.70), Coordinate(lat=19.25, lng=-72.65),
                Coordinate(lat=19.18, lng=-72.50), Coordinate(lat=19.10, lng=-72.60),
            ],
            severity=Severity.HIGH,
            last_updated=now - timedelta(days=2),
            description="Large agricultural area prone to seasonal flooding from the Artibonite River.",
        ),
        HazardZone(
            id="HTzone2",
            name="Enriquillo-Plantain Garden Fault Zone Risk Area",
            type=DisasterType.EARTHQUAKE,
            area=[Coordinate(lat=lat, lng=lng) for lat, lng in fault_line],
            severity=Severity.HIGH,
            last_updated=now - timedelta(days=30),
            description="Area along a major fault line with high seismic risk.",
        ),
        HazardZone(
            id="HTzone3",
            name="Coastal Storm Surge Zone - South",
            type=DisasterType.STORM,
            area=CircleArea(center=Coordinate(lat=18.15, lng=-73.80), radius=20000),
            severity=Severity.MEDIUM,
            last_updated=now - timedelta(days=5),
            description="Southern coastal region vulnerable to storm surges during hurricane season.",
        ),
    ]


def seed_news(now: datetime) -> List[NewsArticle]:
    return [
        NewsArticle(
            id="news1",
            title="Heavy Rains Cause Flooding in Northern Haiti",
            description="Several communities in the Nord Department are facing severe flooding after days of "
                        "torrential rainfall. Emergency services are on alert.\n\nFurther details indicate that "
                        "roads are impassable and several homes have been damaged. The local population is "
                        "seeking shelter on higher ground.",
            image_url="https://picsum.photos/seed/HTnewsFlood/400/200",
            source="Haiti Libre",
            link="#",
            published_date=now - timedelta(hours=5),
            disaster_type_tags=[DisasterType.FLOOD, DisasterType.STORM],
        ),
        NewsArticle(
            id="news2",
            title="Earthquake Preparedness Drills in Port-au-Prince Schools",
            description="Local authorities and NGOs are conducting earthquake preparedness drills in schools "
                        "across the capital to improve safety awareness.\n\nThese drills include 'drop, cover, "
                        "and hold on' exercises and evacuation plans. The initiative aims to reduce casualties "
                        "in the event of a seismic event.",
            image_url="https://picsum.photos/seed/HTnewsQuake/400/200",
            source="Le Nouvelliste",
            link="#",
            published_date=now - timedelta(days=1),
            disaster_type_tags=[DisasterType.EARTHQUAKE],
        ),
    ]
