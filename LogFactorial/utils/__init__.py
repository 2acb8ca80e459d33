from .log_binomial import log_binomial, log_multinomial
