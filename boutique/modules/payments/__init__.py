# boutique/modules/payments/__init__.py
