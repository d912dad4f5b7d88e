from .password import check_password, hash_password
from .token import create_access_token, decode_access_token

__all__ = ["check_password", "hash_password", "create_access_token", "decode_access_token"]
