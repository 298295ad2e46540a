# hood_service/crud/__init__.py

from .crud_association import association
from .crud_field import field
from .crud_field_reservation import field_reservation
from .crud_relations import relations
from .crud_transaction import transaction
from .crud_user import user
