# generic app factory
from flask import Flask

from common.errors import register_error_handlers

# create a Flask application with the following parameters:
#   name: The import name of the application package
#   config_obj: A class instance containing configuration parameters
#   extensions: A list of extension objects to init with this app
#   blueprints: A list of Flask blueprints to register within the app
#   init_app_context_steps: A list of things to do with this app's context
#   commands: A list of click commands to expose through `flask`
def create_flask_app(*, name, config_obj, extensions, blueprints,
                     init_app_context_steps=(), commands=()):
    # create app and configure it
    app = Flask(name)
    app.config.from_object(config_obj)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # init all the extensions
    for ext in extensions:
        ext.init_app(app)

    # perform initialization steps in app's context
    with app.app_context():
        for step in init_app_context_steps:
            step(app)

    # register blueprints and JSON error handlers
    for bp in blueprints:
        app.register_blueprint(bp)
    register_error_handlers(app)

    # register CLI commands
    for command in commands:
        app.cli.add_command(command)

    # return app
    return app
