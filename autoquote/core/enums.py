from enum import Enum


class EditedField(str, Enum):
    COST = "cost"
    PROFIT = "profit"
    SELLING_PRICE = "sellingPrice"

    def __str__(self):
        return self.value


class StoreOperation(str, Enum):
    LIST = "list"
    CREATE = "create"
    DELETE = "delete"

    def __str__(self):
        return self.value
