from jeepney_mcp.server import main

main()
