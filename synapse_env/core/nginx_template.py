"""Nginx server block templates."""

WELL_KNOWN_BLOCK = """# Well-known
server {{
    listen       80;
    server_name  {server_name};
    location /.well-known/matrix/client {{
        return 200 '{{"m.homeserver":{{"base_url":"{synapse_url}"}}}}';
        add_header Content-Type application/json;
        add_header 'Access-Control-Allow-Origin' '*';
    }}
    location /.well-known/matrix/server {{
        return 200 '{{"m.server": "{synapse_authority}"}}';
        add_header Content-Type application/json;
    }}
}}
"""

MAS_COMPAT_LOCATION = """    location ~ ^/_matrix/client/(.*)/(login|logout|refresh) {{
        proxy_pass http://{mas_upstream};
        proxy_http_version 1.1;
        proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
    }}
"""

SYNAPSE_BLOCK = """# Synapse
server {{
    listen       80;
    server_name  {synapse_host};
{extra_locations}    location ~ ^(/_matrix|/_synapse/client|/_synapse/admin) {{
        proxy_pass http://synapse:8448;
        client_max_body_size 50M;
        proxy_http_version 1.1;
        proxy_set_header Host $host:$server_port;
        proxy_set_header X-Forwarded-For $remote_addr;
        proxy_set_header X-Forwarded-Proto $scheme;
    }}
}}
"""

PROXY_BLOCK = """# {label}
server {{
    listen       80;
    server_name  {host};
    location / {{
        proxy_pass http://{upstream};
        add_header Content-Security-Policy "frame-ancestors 'self'";
        add_header X-Content-Type-Options nosniff;
        add_header X-Frame-Options SAMEORIGIN;
        add_header X-XSS-Protection "1; mode=block";
        proxy_http_version 1.1;
        proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
    }}
}}
"""

# Order of proxied services in the generated file
PROXY_ORDER = ["mas", "mailhog", "elementweb", "hookshot", "synapseadmin", "adminer"]


def generate_nginx_config(env, header: str) -> str:
    """Generate the reverse-proxy config from an environment."""
    blocks = [
        f"# {header}\n",
        WELL_KNOWN_BLOCK.format(
            server_name=env.server_name,
            synapse_url=env.synapse_url,
            synapse_authority=f"{env.synapse_host}:{env.listen_port}",
        ),
    ]

    extra_locations = ""
    if env.enable_mas:
        extra_locations = MAS_COMPAT_LOCATION.format(mas_upstream=env.service("mas").upstream)
    blocks.append(SYNAPSE_BLOCK.format(
        synapse_host=env.synapse_host,
        extra_locations=extra_locations,
    ))

    for name in PROXY_ORDER:
        service = env.service(name)
        if service.enabled:
            blocks.append(PROXY_BLOCK.format(
                label=service.label,
                host=service.host,
                upstream=service.upstream,
            ))

    return "".join(blocks)
