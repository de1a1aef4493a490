import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import __version__

UA   = f"falgen-cli/{__version__}"

def make_session() -> requests.Session:
    retries = Retry(
        total=2, backoff_factor=0.3,
        status_forcelist=(429,500,502,503,504),
        allowed_methods=frozenset(["GET","HEAD"]),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries, pool_connections=4, pool_maxsize=4)
    s = requests.Session()
    s.mount("http://", adapter); s.mount("https://", adapter)
    s.headers.update({"User-Agent": UA, "Accept": "application/json"})
    return s

SESSION = make_session()
