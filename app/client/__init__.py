from .api import ApiClient, ApiError
from .board import BoardState
