# hood_service/graphql/queries.py
import strawberry

from .association_queries import AssociationQueries
from .field_queries import FieldQueries
from .transaction_queries import TransactionQueries


@strawberry.type
class Query(AssociationQueries, FieldQueries, TransactionQueries):
    pass
