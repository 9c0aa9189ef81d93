# boutique/modules/__init__.py
