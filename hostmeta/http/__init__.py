from .formats import Format, Raw, Json, Xml  # NOQA
from .retry import Client, backoff_delays  # NOQA
