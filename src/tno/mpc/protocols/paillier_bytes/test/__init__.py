"""
Testing module of the tno.mpc.protocols.paillier_bytes library
"""
