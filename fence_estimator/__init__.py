"""
Fence estimator — pricing and saved quotes for a fencing contractor.

Pure pricing math lives in pricing_engine; quotes persist through
quote_store into a key-value storage area.
"""
