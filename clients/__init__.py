# Infrastructure clients
from clients.vault_client import VaultClient, VaultError, get_secret_value
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.email_client import EmailGatewayClient, EmailGatewayError
from clients.geocoding_client import GeocodeResult, GeocodingClient
