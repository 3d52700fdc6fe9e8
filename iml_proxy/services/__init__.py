from iml_proxy.api.imleagues_client import IMLeaguesClient
from iml_proxy.services.forwarder import ProxyForwarder
from iml_proxy.services.session_manager import SessionManager

# Process-wide instances. The session manager owns the only IMLeagues session.
session_manager = SessionManager()
api_client = IMLeaguesClient(ProxyForwarder(session_manager))
