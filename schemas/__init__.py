# Import all schemas to make them accessible from schemas package
from schemas.user import UserSchema
from schemas.client import ClientSchema, ClientListSchema
from schemas.invoice import InvoiceSchema, InvoiceListSchema, PaymentSchema
from schemas.expense import ExpenseSchema, ExpenseListSchema
from schemas.product import ProductSchema, ProductListSchema
