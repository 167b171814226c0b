from fastapi.templating import Jinja2Templates

from .config import settings
from .dictionary import DictionaryClient
from .state import ClientStateRegistry
from .translation import TranslationClient

templates = Jinja2Templates(directory=settings.TEMPLATE_DIR)
client_states = ClientStateRegistry()
dictionary_client = DictionaryClient()
translation_client = TranslationClient()
