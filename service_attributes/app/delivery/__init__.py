"""
Result delivery package.

Routes a sealed result to the relying party, either inline on the browser
redirect or pushed out-of-band to a callback URL.
"""
