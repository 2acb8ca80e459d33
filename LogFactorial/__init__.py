# modules
from . import special
from . import utils
from .special import logfactorial, logfactorial_array
from .utils import log_binomial, log_multinomial

__version__ = '0.1.0'
