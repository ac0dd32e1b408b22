from .trips.trip_model import Trip
from .trips.participant import Participant
