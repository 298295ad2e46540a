# hood_service/graphql/mutations.py
import strawberry

from .association_mutations import AssociationMutations
from .field_mutations import FieldMutations
from .transaction_mutations import TransactionMutations


@strawberry.type
class Mutation(AssociationMutations, FieldMutations, TransactionMutations):
    pass
