from . import lookup_table
from . import stirling
from .logfactorial import logfactorial, logfactorial_array
