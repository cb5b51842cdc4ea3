"""CEP weather test data contract"""
