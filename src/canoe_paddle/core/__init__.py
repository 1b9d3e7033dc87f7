# src/canoe_paddle/core/__init__.py
"""
Core do canoe-paddle.

Componentes principais:
    - naming   → normalização de identificadores
    - errors   → payload serializável de erros
    - config   → arquivos, merge, ambiente e `PaddleSettings`
    - pipeline → definição de pipeline e overrides
    - compiler → `PodDefinition` → manifest YAML
    - storage  → filtro de chaves, commit e fetch de artefatos
    - protocol → sentinelas e máquinas de estado main/paddle
    - engine   → `PipelineCompiler`

Princípios fundamentais:
    - Nenhum estado global: configuração chega como valor explícito
    - Mesma entrada ⇒ mesmo manifest, byte a byte
    - Erros são tipados e propagados, nunca engolidos
"""
