# app.py
"""
Entrypoint da aplicação.

Uso:
  python app.py calcular --demanda 100 --peso-g 200 --perda 5
  python app.py classificar pcs
  python app.py validar --consumo 0.8 --demanda 1000 --peso-g 100 --quantidade 0.4 --equivalencia 500
  python app.py producao ficha_tecnica.xlsx
  python app.py necessidade ficha_tecnica.xlsx estoque_insumos.xlsx
"""

from insumos.adapters.cli import main

if __name__ == "__main__":
    main()
