"""服务层：安装编排与服务容器"""
