"""核心层：异常、配置、清单、拉取器"""
