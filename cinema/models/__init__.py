from cinema.models.user import User
from cinema.models.hall import Hall
from cinema.models.reservation import Reservation
