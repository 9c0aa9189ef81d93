# boutique/constants.py
APP_NAME = "Elegance Boutique"
CURRENCY = "MK"

# ---- Storage ----
DATA_DIR = "data"
DB_FILE_NAME = "boutique.db"
TABLE_COLLECTIONS = "collections"
TABLE_SCHEMA_VERSION = "schema_version"
SCHEMA_VERSION = "1"

COLLECTION_PRODUCTS = "products"
COLLECTION_CUSTOMERS = "customers"
COLLECTION_ORDERS = "orders"
COLLECTION_EXPENSES = "expenses"
COLLECTION_INITIALIZED = "initialized"

COLLECTIONS = (
    COLLECTION_PRODUCTS,
    COLLECTION_CUSTOMERS,
    COLLECTION_ORDERS,
    COLLECTION_EXPENSES,
    COLLECTION_INITIALIZED,
)

# ---- Catalog ----
LOW_STOCK_THRESHOLD = 3

# Known categories; products may still carry ad hoc ones.
PRODUCT_CATEGORIES = (
    "Clothes",
    "Shoes",
    "Bags",
    "Accessories",
    "Shein Custom Order",
)

EXPENSE_CATEGORIES = (
    "Rent",
    "Utilities",
    "Salaries",
    "Packaging",
    "Marketing",
    "Inventory Shipping",
    "Other",
)

# ---- Installment notes ----
NOTE_INITIAL_PAYMENT = "Initial Payment"
NOTE_INSTALLMENT = "Installment Payment"
NOTE_FINAL_SETTLEMENT = "Final Settlement"

PAYMENT_KIND_INSTALLMENT = "installment"
PAYMENT_KIND_FULL = "full"

# ---- Insights ----
GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
INSIGHT_TIMEOUT_SECONDS = 20
INSIGHT_ORDER_SAMPLE = 50
INSIGHT_STOCK_BELOW = 5

INSIGHT_MISSING_KEY = (
    "API Key is missing. Please ensure the API_KEY environment variable "
    "is set to use AI features."
)
INSIGHT_FALLBACK = "Unable to generate insights at the moment. Please try again later."
DESCRIPTION_FALLBACK = "Premium fashion item suitable for any occasion."
