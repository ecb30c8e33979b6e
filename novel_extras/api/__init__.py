def register_blueprints(app):
    from novel_extras.api.stats import bp as stats_bp
    from novel_extras.api.user import bp as user_bp
    from novel_extras.api.comment import bp as comment_bp
    from novel_extras.api.event import bp as event_bp

    app.register_blueprint(stats_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(comment_bp)
    app.register_blueprint(event_bp)
