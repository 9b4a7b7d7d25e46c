"""Rate limiting / Limiteur de requetes.

slowapi, cle = adresse IP du client. Applique a l'import CSV, qui enchaine
un appel au store par ligne.
slowapi keyed by client IP. Applied to the CSV import, which chains one store
call per row.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
