"""Runtime configuration read from the environment."""
import os

# Supabase (users, products)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Upstash Redis (carts)
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Sentinel stored on users who have not configured a shipping address yet
DEFAULT_ADDRESS = os.environ.get("DEFAULT_ADDRESS", "ADDRESS_NOT_SET")

# Payment option assigned to newly created carts
DEFAULT_PAYMENT_OPTION = os.environ.get("DEFAULT_PAYMENT_OPTION", "PAYMENT_OPTION_DEFAULT")

# Table names
USERS_TABLE = "users"
PRODUCTS_TABLE = "products"
