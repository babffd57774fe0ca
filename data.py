# data.py
from typing import List

from models import Booking, BookingStatus, Review, Service, ShopSettings

SETTINGS_KEY = "barbershop_settings"
SERVICES_KEY = "barbershop_services"
BOOKINGS_KEY = "barbershop_bookings"

business_hours = {
    "open_hour": 9,
    "close_hour": 18,
    "slot_minutes": 30,
}

DEFAULT_SERVICE_IMAGE = (
    "https://images.unsplash.com/photo-1585747860715-2ba37e788b70"
    "?q=80&w=800&auto=format&fit=crop"
)
DEFAULT_SERVICE_DURATION = 30


def initial_settings() -> ShopSettings:
    return ShopSettings(name="BARBEARIA GONÇALVES", tagline="O Futuro do Estilo")


def initial_services() -> List[Service]:
    return [
        Service(
            id="1",
            name="Degradê Neon",
            description="Degradê na pele com precisão, acabamento na navalha e estilização.",
            price=45,
            duration_minutes=45,
            image="https://images.unsplash.com/photo-1559526324-4b87b5e36e44?q=80&w=800&auto=format&fit=crop",
        ),
        Service(
            id="2",
            name="Cavalheiro Clássico",
            description="Corte na tesoura, toalha quente e aparo de barba.",
            price=55,
            duration_minutes=60,
            image="https://images.unsplash.com/photo-1621605815971-fbc98d665033?q=80&w=800&auto=format&fit=crop",
        ),
        Service(
            id="3",
            name="Escultura de Barba",
            description="Modelagem detalhada da barba com tratamento de óleo quente.",
            price=30,
            duration_minutes=30,
            image="https://images.unsplash.com/photo-1622286342621-4bd786c2447c?q=80&w=800&auto=format&fit=crop",
        ),
        Service(
            id="4",
            name="Máquina Rápida",
            description="Corte padrão na máquina. Sem frescura, apenas limpo.",
            price=25,
            duration_minutes=20,
            image="https://images.unsplash.com/photo-1599351431202-1e0f0137899a?q=80&w=800&auto=format&fit=crop",
        ),
    ]


def initial_bookings(today: str) -> List[Booking]:
    """Two appointments for today plus two reviewed visits from the past."""
    return [
        Booking(
            id="101", service_id="1", service_name="Degradê Neon",
            customer_name="John Wick", customer_phone="555-0101",
            date=today, time="10:00", status=BookingStatus.CONFIRMED,
        ),
        Booking(
            id="102", service_id="3", service_name="Escultura de Barba",
            customer_name="Tony Stark", customer_phone="555-0102",
            date=today, time="14:30", status=BookingStatus.CONFIRMED,
        ),
        Booking(
            id="99", service_id="2", service_name="Cavalheiro Clássico",
            customer_name="Bruce Wayne", customer_phone="555-0099",
            date="2023-10-25", time="18:00", status=BookingStatus.COMPLETED,
            review=Review(rating=5, comment="Serviço impecável. O ambiente é incrível.", date="2023-10-25"),
        ),
        Booking(
            id="98", service_id="4", service_name="Máquina Rápida",
            customer_name="Clark Kent", customer_phone="555-0098",
            date="2023-10-24", time="09:00", status=BookingStatus.COMPLETED,
            review=Review(rating=4, comment="Rápido e eficiente, como prometido.", date="2023-10-24"),
        ),
    ]
