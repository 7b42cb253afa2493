from .models import RestaurantLocation

__all__ = ["RestaurantLocation"]
