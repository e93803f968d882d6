from papers_page.build import main

main()
