# app.py
from flask import Flask
from config.settings import get_config
from extensions.database import db
from extensions.logger import init_logger
from extensions.tracking import init_tracking
from utils.response import json_response
from utils.exceptions import BizError
from controllers.catalog_step_controller import catalog_step_bp
from controllers.test_case_controller import test_case_bp
from controllers.membership_controller import membership_bp
from controllers.history_controller import history_bp


def create_app(config_name="development", config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    if config_overrides:
        app.config.update(config_overrides)

    # 初始化扩展
    db.init_app(app)
    init_logger(app)
    init_tracking(app)

    # 步骤目录
    app.register_blueprint(catalog_step_bp)
    # 测试用例
    app.register_blueprint(test_case_bp)
    # 用例步骤编排
    app.register_blueprint(membership_bp)
    # 变更历史（撤销 / 重做）
    app.register_blueprint(history_bp)

    # 错误处理
    @app.errorhandler(404)
    def not_found(e):
        return json_response(message="接口不存在", code=404)

    @app.errorhandler(500)
    def server_error(e):
        return json_response(message="服务器内部错误", code=500)

    @app.errorhandler(BizError)
    def _biz_err(e: BizError):
        return json_response(code=e.code, message=e.message, data=e.data)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="127.0.0.1", port=8888, debug=True)
