from money_allocator.domain.monetary.currency import Currency


# Minor units follow ISO 4217
USD = Currency("USD", 2, "US Dollar", 840)
EUR = Currency("EUR", 2, "Euro", 978)
GBP = Currency("GBP", 2, "Pound Sterling", 826)
JPY = Currency("JPY", 0, "Yen", 392)
AUD = Currency("AUD", 2, "Australian Dollar", 36)
CAD = Currency("CAD", 2, "Canadian Dollar", 124)
CHF = Currency("CHF", 2, "Swiss Franc", 756)
CNY = Currency("CNY", 2, "Yuan Renminbi", 156)
SEK = Currency("SEK", 2, "Swedish Krona", 752)
NZD = Currency("NZD", 2, "New Zealand Dollar", 554)
MXN = Currency("MXN", 2, "Mexican Peso", 484)
SGD = Currency("SGD", 2, "Singapore Dollar", 702)
HKD = Currency("HKD", 2, "Hong Kong Dollar", 344)
NOK = Currency("NOK", 2, "Norwegian Krone", 578)
KRW = Currency("KRW", 0, "Won", 410)
TRY = Currency("TRY", 2, "Turkish Lira", 949)
RUB = Currency("RUB", 2, "Russian Ruble", 643)
INR = Currency("INR", 2, "Indian Rupee", 356)
BRL = Currency("BRL", 2, "Brazilian Real", 986)
ZAR = Currency("ZAR", 2, "Rand", 710)
ARS = Currency("ARS", 2, "Argentine Peso", 32)
CLP = Currency("CLP", 0, "Chilean Peso", 152)
COP = Currency("COP", 2, "Colombian Peso", 170)
PEN = Currency("PEN", 2, "Sol", 604)
UYU = Currency("UYU", 2, "Peso Uruguayo", 858)
VES = Currency("VES", 2, "Bolivar Soberano", 928)

# Three-decimal currencies
KWD = Currency("KWD", 3, "Kuwaiti Dinar", 414)
BHD = Currency("BHD", 3, "Bahraini Dinar", 48)

PREDEFINED_CURRENCIES = (
    USD, EUR, GBP, JPY, AUD, CAD, CHF, CNY, SEK, NZD, MXN, SGD, HKD, NOK,
    KRW, TRY, RUB, INR, BRL, ZAR, ARS, CLP, COP, PEN, UYU, VES, KWD, BHD,
)

# Register all predefined currencies
for _currency in PREDEFINED_CURRENCIES:
    Currency.register(_currency, overwrite=True)
