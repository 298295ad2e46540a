# hood_service/models/__init__.py
# Importing every model here registers all tables on Base.metadata.
from .user import User
from .association import Association
from .membership import UserAssociation, AssociationAdmin, AssociationTreasurer
from .transaction import Transaction
from .field import Field
from .field_reservation import FieldReservation
