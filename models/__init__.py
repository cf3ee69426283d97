# Import all models to make them accessible from models package
from models.user import User
from models.client import Client
from models.invoice import Invoice, Payment
from models.expense import Expense
from models.product import Product
